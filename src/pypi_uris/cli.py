from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys

import yaml

from pypi_uris.config import AppConfig, load_config
from pypi_uris.errors import RecipeError, UsageError
from pypi_uris.models import PackageIdentity
from pypi_uris.names import normalize_name
from pypi_uris.versions import translate_version


def build_parser() -> argparse.ArgumentParser:
    """
    构建 pypi-uris 的命令行参数解析器。
    """
    parser = argparse.ArgumentParser(prog="pypi-uris")
    parser.add_argument(
        "--version",
        dest="show_version",
        action="store_true",
        help="输出版本号并退出",
    )
    parser.add_argument("--config", help="配置文件路径（.toml 或 .yaml）")
    parser.add_argument("--host", help="下载主机名（默认：files.pythonhosted.org）")
    parser.add_argument("--pkg-name", help="当前包名（缺省取 PYPI_PN / PN）")
    parser.add_argument("--pkg-version", help="当前包版本（缺省取 PV，会做 PEP 440 翻译）")

    subparsers = parser.add_subparsers(dest="command")

    normalize = subparsers.add_parser("normalize", help="规范化项目名")
    normalize.add_argument("names", nargs="+", metavar="NAME")

    translate = subparsers.add_parser("translate-version", help="将 Gentoo 版本翻译为 PEP 440 版本")
    translate.add_argument("versions", nargs="+", metavar="VERSION")

    sdist = subparsers.add_parser("sdist-url", help="输出 sdist 下载 URL")
    sdist.add_argument("--no-normalize", action="store_true", help="文件名中保留原始项目名")
    sdist.add_argument("args", nargs="*", metavar="ARG", help="[project [version [suffix]]]")

    wheel = subparsers.add_parser("wheel-name", help="输出 wheel 文件名")
    wheel.add_argument("args", nargs="*", metavar="ARG", help="[project [version [python-tag [abi-platform-tag]]]]")

    wheel_url = subparsers.add_parser("wheel-url", help="输出 wheel 下载 URL")
    wheel_url.add_argument("--unpack", action="store_true", help="附加 `-> <filename>.zip` 重命名指令")
    wheel_url.add_argument(
        "args", nargs="*", metavar="ARG", help="[project [version [python-tag [abi-platform-tag]]]]"
    )

    globals_ = subparsers.add_parser("globals", help="为配方清单计算 SRC_URI 与 S")
    globals_.add_argument("recipes", help="配方清单路径（.toml 或 .yaml）")
    globals_.add_argument("--format", choices=["shell", "json", "table"], default="shell", help="输出格式")
    globals_.add_argument("--output", help="输出到文件（默认 stdout）")

    return parser


def _merge_cli_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    将 CLI 参数覆盖合并到 AppConfig。
    """
    urls = cfg.urls
    if args.host:
        urls = replace(urls, host=args.host)

    identity = cfg.identity
    if args.pkg_name or args.pkg_version:
        name = args.pkg_name or (identity.name if identity else None)
        version = translate_version(args.pkg_version) if args.pkg_version else (identity.version if identity else None)
        identity = PackageIdentity(name=name, version=version) if name and version else None

    return replace(cfg, urls=urls, identity=identity)


def _write_text(text: str, output_path: str | None) -> None:
    if output_path:
        Path(output_path).write_text(text, encoding="utf-8")
    else:
        print(text, end="")


def _run_globals(args: argparse.Namespace, cfg: AppConfig) -> int:
    """
    globals 子命令：读取配方清单并输出每个配方的 SRC_URI 与 S。
    """
    from pypi_uris.formatters import print_table, render_json, render_shell
    from pypi_uris.recipe import load_recipes, recipe_globals

    try:
        recipes = load_recipes(Path(args.recipes))
    except RecipeError as exc:
        print(f"pypi-uris: 读取配方失败：{exc}", file=sys.stderr)
        return 1

    results = [recipe_globals(r, cfg.urls) for r in recipes]
    for g in results:
        for warning in g.warnings:
            print(f"pypi-uris: 警告：{warning}", file=sys.stderr)

    output_path = getattr(args, "output", None)
    if args.format == "table":
        if output_path:
            with open(output_path, "w", encoding="utf-8") as f:
                print_table(results, file=f)
        else:
            print_table(results)
        return 0
    if args.format == "json":
        text = render_json(results) + "\n"
    else:
        text = "\n".join(f"# {g.recipe.pn}-{g.recipe.pv}\n{render_shell(g)}" for g in results)
    _write_text(text, output_path)
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    pypi-uris 命令行入口。
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.show_version:
        from pypi_uris import __version__

        print(__version__)
        return 0

    if args.command is None:
        parser.print_help(sys.stderr)
        return 2

    if args.command == "normalize":
        for name in args.names:
            print(normalize_name(name))
        return 0

    if args.command == "translate-version":
        for version in args.versions:
            print(translate_version(version))
        return 0

    try:
        cfg = _merge_cli_overrides(load_config(args.config), args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"pypi-uris: 读取配置失败：{exc}", file=sys.stderr)
        return 1

    if args.command == "globals":
        return _run_globals(args, cfg)

    from pypi_uris.urls import sdist_url, wheel_name, wheel_url

    try:
        if args.command == "sdist-url":
            print(sdist_url(*args.args, no_normalize=bool(args.no_normalize), identity=cfg.identity, settings=cfg.urls))
            return 0
        if args.command == "wheel-name":
            print(wheel_name(*args.args, identity=cfg.identity, settings=cfg.urls))
            return 0
        if args.command == "wheel-url":
            print(wheel_url(*args.args, unpack=bool(args.unpack), identity=cfg.identity, settings=cfg.urls))
            return 0
    except UsageError as exc:
        print(f"pypi-uris: {exc}", file=sys.stderr)
        return 2

    print(f"pypi-uris: 未知子命令 {args.command!r}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
