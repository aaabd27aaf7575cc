from __future__ import annotations

import json
from typing import Any, TextIO

from rich.console import Console
from rich.table import Table

from pypi_uris.recipe import RecipeGlobals


def _shell_quote(value: str) -> str:
    """
    以 ebuild 中的双引号形式输出，保留 `${WORKDIR}` 等变量展开。
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("`", "\\`")
    return f'"{escaped}"'


def render_shell(globals_: RecipeGlobals) -> str:
    """
    渲染为 ebuild 中的变量赋值行。
    """
    return f"SRC_URI={_shell_quote(globals_.src_uri)}\nS={_shell_quote(globals_.s)}\n"


def globals_to_json_obj(globals_: RecipeGlobals) -> dict[str, Any]:
    """
    将 RecipeGlobals 转换为可 JSON 序列化的字典结构。
    """
    return {
        "pn": globals_.recipe.pn,
        "pv": globals_.recipe.pv,
        "fetch": globals_.recipe.fetch.value,
        "name": globals_.identity.name,
        "version": globals_.identity.version,
        "src_uri": globals_.src_uri,
        "s": globals_.s,
        "warnings": list(globals_.warnings),
    }


def render_json(items: list[RecipeGlobals]) -> str:
    """
    渲染 JSON 输出。
    """
    return json.dumps([globals_to_json_obj(g) for g in items], ensure_ascii=False, indent=2)


def print_table(items: list[RecipeGlobals], *, file: TextIO | None = None) -> None:
    """
    以控制台表格形式输出各配方的 SRC_URI 与 S。
    """
    console = Console(file=file)
    table = Table(title="pypi-uris recipe globals")
    table.add_column("PN", no_wrap=True)
    table.add_column("PV", no_wrap=True)
    table.add_column("fetch", no_wrap=True)
    table.add_column("SRC_URI")
    table.add_column("S")
    for g in items:
        table.add_row(g.recipe.pn, g.recipe.pv, g.recipe.fetch.value, g.src_uri, g.s)
    console.print(table)
