from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from pypi_uris.config import load_mapping_file
from pypi_uris.errors import RecipeError
from pypi_uris.models import ArtifactKind, PackageIdentity
from pypi_uris.names import normalize_name
from pypi_uris.urls import UrlSettings, sdist_url, wheel_url
from pypi_uris.versions import is_pep440

WORKDIR = "${WORKDIR}"


@dataclass(frozen=True, slots=True)
class Recipe:
    """
    一个构建配方（ebuild）中与 PyPI 拉取相关的变量。
    """

    pn: str
    pv: str
    pypi_pn: str | None = None
    no_normalize: bool = False
    fetch: ArtifactKind = ArtifactKind.SDIST
    unpack: bool = True
    python_tag: str | None = None
    abi_platform_tag: str | None = None

    @property
    def identity(self) -> PackageIdentity:
        return PackageIdentity.from_recipe_vars(self.pn, self.pv, pypi_pn=self.pypi_pn)


@dataclass(frozen=True, slots=True)
class RecipeGlobals:
    """
    为配方计算出的全局变量（SRC_URI 与 S），以及非致命的提示信息。
    """

    recipe: Recipe
    identity: PackageIdentity
    src_uri: str
    s: str
    warnings: tuple[str, ...] = ()


def recipe_globals(recipe: Recipe, settings: UrlSettings | None = None) -> RecipeGlobals:
    """
    计算配方的缺省 SRC_URI 与 S。

    sdist：S 为 `${WORKDIR}/<name>-<version>`，name 默认规范化；
    wheel：S 为 `${WORKDIR}`（wheel 解包后没有顶层目录）。
    """
    settings = settings or UrlSettings()
    identity = recipe.identity

    warnings: list[str] = []
    if not is_pep440(identity.version):
        warnings.append(f"{recipe.pn}: version {identity.version!r} is not a valid PEP 440 version")

    if recipe.fetch == ArtifactKind.WHEEL:
        src_uri = wheel_url(
            identity.name,
            identity.version,
            recipe.python_tag or settings.python_tag,
            recipe.abi_platform_tag or settings.abi_platform_tag,
            unpack=recipe.unpack,
            settings=settings,
        )
        s = WORKDIR
    else:
        src_uri = sdist_url(identity.name, identity.version, no_normalize=recipe.no_normalize, settings=settings)
        name = identity.name if recipe.no_normalize else normalize_name(identity.name)
        s = f"{WORKDIR}/{name}-{identity.version}"

    return RecipeGlobals(
        recipe=recipe,
        identity=identity,
        src_uri=src_uri,
        s=s,
        warnings=tuple(warnings),
    )


def _parse_fetch(raw: Any, *, where: str) -> ArtifactKind:
    """
    将 fetch 字段解析为 ArtifactKind。
    """
    try:
        return ArtifactKind(str(raw or ArtifactKind.SDIST.value))
    except ValueError:
        raise RecipeError(f"{where}: unknown fetch kind {raw!r} (expected 'sdist' or 'wheel')") from None


def _optional_str(entry: dict[str, Any], key: str, *, where: str) -> str | None:
    """
    读取可选的字符串字段；存在但不是字符串（如 YAML 中未加引号的 `pv: 1.10`）时抛出 RecipeError。
    """
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise RecipeError(f"{where}: {key!r} must be a string, got {type(value).__name__} {value!r}")
    return value or None


def _optional_bool(entry: dict[str, Any], key: str, default: bool, *, where: str) -> bool:
    """
    读取可选的布尔字段；存在但不是布尔值（例如字符串 "false"）时抛出 RecipeError。
    """
    value = entry.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise RecipeError(f"{where}: {key!r} must be a boolean, got {type(value).__name__} {value!r}")
    return value


def parse_recipe(entry: dict[str, Any], *, where: str = "recipe") -> Recipe:
    """
    将清单中的单个条目解析为 Recipe。
    """
    if not isinstance(entry, dict):
        raise RecipeError(f"{where}: expected a table, got {type(entry).__name__}")
    pn = _optional_str(entry, "pn", where=where)
    pv = _optional_str(entry, "pv", where=where)
    if not pn or not pv:
        raise RecipeError(f"{where}: both 'pn' and 'pv' are required")

    return Recipe(
        pn=pn,
        pv=pv,
        pypi_pn=_optional_str(entry, "pypi_pn", where=where),
        no_normalize=_optional_bool(entry, "no_normalize", False, where=where),
        fetch=_parse_fetch(_optional_str(entry, "fetch", where=where), where=where),
        unpack=_optional_bool(entry, "unpack", True, where=where),
        python_tag=_optional_str(entry, "python_tag", where=where),
        abi_platform_tag=_optional_str(entry, "abi_platform_tag", where=where),
    )


def load_recipes(path: Path) -> list[Recipe]:
    """
    读取配方清单（TOML 的 `[[recipe]]` 或 YAML 的 `recipe:` 列表）。
    """
    try:
        data = load_mapping_file(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise RecipeError(f"{path}: {exc}") from exc

    entries = data.get("recipe") or []
    if not isinstance(entries, list):
        raise RecipeError(f"{path}: 'recipe' must be a list")
    return [parse_recipe(entry, where=f"{path}: recipe #{i + 1}") for i, entry in enumerate(entries)]
