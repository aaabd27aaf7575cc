from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib

from pypi_uris.models import PackageIdentity
from pypi_uris.urls import UrlSettings


@dataclass(frozen=True, slots=True)
class AppConfig:
    """
    pypi-uris 的运行配置（可来自配置文件、环境变量与 CLI 参数合并）。
    """

    urls: UrlSettings
    identity: PackageIdentity | None = None


def _find_default_config_file(cwd: Path) -> Path | None:
    """
    在当前目录查找默认配置文件路径。
    """
    candidates = [
        ".pypi-uris.toml",
        ".pypi-uris.yaml",
        ".pypi-uris.yml",
        "pypi-uris.toml",
        "pypi-uris.yaml",
        "pypi-uris.yml",
    ]
    for name in candidates:
        p = cwd / name
        if p.exists() and p.is_file():
            return p
    return None


def _load_yaml(path: Path) -> dict[str, Any]:
    """
    读取 YAML 文件（需要 PyYAML）；顶层不是映射时抛出 ValueError。
    """
    import yaml

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def load_mapping_file(path: Path) -> dict[str, Any]:
    """
    读取 .toml 或 .yaml 文件，返回顶层字典。

    文件不存在时抛出 OSError，格式错误或后缀不受支持时抛出 ValueError
    （YAML 语法错误为 yaml.YAMLError）。
    """
    suffix = path.suffix.lower()
    if suffix == ".toml":
        return tomllib.loads(path.read_text(encoding="utf-8"))
    if suffix in {".yaml", ".yml"}:
        return _load_yaml(path)
    raise ValueError(f"{path}: unsupported file type {suffix or path.name!r} (expected .toml or .yaml)")


def _load_identity(tool_cfg: dict[str, Any]) -> PackageIdentity | None:
    """
    从配方环境变量（PN/PV/PYPI_PN）或配置文件的 name/version 构造 PackageIdentity。
    """
    pn = os.environ.get("PN") or str(tool_cfg.get("name") or "")
    pv = os.environ.get("PV") or str(tool_cfg.get("version") or "")
    pypi_pn = os.environ.get("PYPI_PN") or str(tool_cfg.get("pypi_name") or "") or None
    if not (pn or pypi_pn) or not pv:
        return None
    return PackageIdentity.from_recipe_vars(pn, pv, pypi_pn=pypi_pn)


def load_config(config_path: str | None) -> AppConfig:
    """
    从配置文件与环境变量加载 AppConfig。
    """
    config_data: dict[str, Any] = {}
    if config_path:
        config_data = load_mapping_file(Path(config_path))
    else:
        default = _find_default_config_file(Path.cwd())
        if default:
            config_data = load_mapping_file(default)

    tool_cfg = config_data.get("pypi_uris") if isinstance(config_data, dict) else {}
    if not isinstance(tool_cfg, dict):
        tool_cfg = {}

    defaults = UrlSettings()
    host = os.environ.get("PYPI_URIS_HOST") or str(tool_cfg.get("host") or "") or defaults.host
    sdist_suffix = (
        os.environ.get("PYPI_URIS_SDIST_SUFFIX")
        or str(tool_cfg.get("sdist_suffix") or "")
        or defaults.sdist_suffix
    )
    python_tag = (
        os.environ.get("PYPI_URIS_PYTHON_TAG") or str(tool_cfg.get("python_tag") or "") or defaults.python_tag
    )
    abi_platform_tag = (
        os.environ.get("PYPI_URIS_ABI_PLATFORM_TAG")
        or str(tool_cfg.get("abi_platform_tag") or "")
        or defaults.abi_platform_tag
    )

    return AppConfig(
        urls=UrlSettings(
            host=host,
            sdist_suffix=sdist_suffix,
            python_tag=python_tag,
            abi_platform_tag=abi_platform_tag,
        ),
        identity=_load_identity(tool_cfg),
    )
