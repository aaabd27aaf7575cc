from __future__ import annotations

from packaging.version import InvalidVersion, Version

# 顺序有意义：`_pre` 与 `_p` 共享前缀，必须先替换 `_pre`。
_SUFFIX_MAP: tuple[tuple[str, str], ...] = (
    ("_alpha", "a"),
    ("_beta", "b"),
    ("_pre", ".dev"),
    ("_rc", "rc"),
    ("_p", ".post"),
)


def translate_version(version: str) -> str:
    """
    将 Gentoo 风格的包版本翻译为 PyPI（PEP 440）写法。

    每个后缀标记只替换第一次出现：
      1.2_alpha3 -> 1.2a3
      1.2_pre1   -> 1.2.dev1
      1.2_p1     -> 1.2.post1
    """
    for marker, replacement in _SUFFIX_MAP:
        version = version.replace(marker, replacement, 1)
    return version


def is_pep440(version: str) -> bool:
    """
    判断字符串是否为合法的 PEP 440 版本号。
    """
    try:
        Version(version)
    except InvalidVersion:
        return False
    return True
