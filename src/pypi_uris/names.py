from __future__ import annotations

import re

_NORMALIZE_RE = re.compile(r"[-_.]+")


def normalize_name(name: str) -> str:
    """
    将项目名按 sdist/wheel 文件名规则规范化（连续的 `-_.` 折叠为单个 `_`，再转小写）。
    """
    return _NORMALIZE_RE.sub("_", name).lower()
