from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pypi_uris.versions import translate_version

RENAME_SEPARATOR = " -> "


class ArtifactKind(str, Enum):
    """
    从 PyPI 拉取的产物类别。
    """

    SDIST = "sdist"
    WHEEL = "wheel"


@dataclass(frozen=True, slots=True)
class PackageIdentity:
    """
    “当前包”的名称与版本，作为各格式化函数的缺省值来源（由调用方显式注入）。
    """

    name: str
    version: str

    @classmethod
    def from_recipe_vars(cls, pn: str, pv: str, pypi_pn: str | None = None) -> PackageIdentity:
        """
        按配方变量构造：名称优先取 PYPI_PN，版本经 translate_version 翻译。
        """
        return cls(name=pypi_pn or pn, version=translate_version(pv))


@dataclass(frozen=True, slots=True)
class FetchEntry:
    """
    源码拉取列表中的一项（URL，及可选的重命名目标）。
    """

    url: str
    rename_to: str | None = None

    def render(self) -> str:
        if self.rename_to:
            return f"{self.url}{RENAME_SEPARATOR}{self.rename_to}"
        return self.url
