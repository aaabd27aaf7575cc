from __future__ import annotations

from dataclasses import dataclass

from pypi_uris.errors import UsageError
from pypi_uris.models import FetchEntry, PackageIdentity
from pypi_uris.names import normalize_name

DEFAULT_HOST = "files.pythonhosted.org"

_SDIST_MAX_ARGS = 3
_WHEEL_MAX_ARGS = 4


@dataclass(frozen=True, slots=True)
class UrlSettings:
    """
    URL 构造的缺省配置（主机名、sdist 后缀、wheel 标签）。
    """

    host: str = DEFAULT_HOST
    sdist_suffix: str = ".tar.gz"
    python_tag: str = "py3"
    abi_platform_tag: str = "none-any"


_DEFAULT_SETTINGS = UrlSettings()


def _check_arity(func: str, args: tuple[str, ...], max_args: int) -> None:
    """
    位置参数数量超过上限时抛出 UsageError。
    """
    if len(args) > max_args:
        raise UsageError(func, f"too many parameters ({len(args)} given, at most {max_args} allowed)")


def _positional(args: tuple[str, ...], index: int) -> str | None:
    """
    取第 index 个位置参数，缺失时返回 None。
    """
    return args[index] if len(args) > index else None


def _resolve_identity_field(
    func: str,
    value: str | None,
    identity: PackageIdentity | None,
    field: str,
) -> str:
    """
    参数缺失时从 identity 读取缺省值；identity 也缺失时抛出 UsageError。
    """
    if value is not None:
        return value
    if identity is None:
        raise UsageError(func, f"no {field} given and no package identity available")
    return getattr(identity, field)


def _base_url(host: str) -> str:
    return f"https://{host}/packages"


def sdist_url(
    *args: str,
    no_normalize: bool = False,
    identity: PackageIdentity | None = None,
    settings: UrlSettings = _DEFAULT_SETTINGS,
) -> str:
    """
    构造 sdist 的下载 URL。

    位置参数依次为 project、version、suffix（最多 3 个），缺省值分别取自
    identity.name、identity.version 与 settings.sdist_suffix。

    路径中的首字母目录始终取自原始项目名；文件名部分默认使用规范化后的名称，
    no_normalize=True 时保留原始名称（用于尚未遵循 PEP 625 的旧 sdist）。
    """
    _check_arity("sdist_url", args, _SDIST_MAX_ARGS)
    project = _resolve_identity_field("sdist_url", _positional(args, 0), identity, "name")
    version = _resolve_identity_field("sdist_url", _positional(args, 1), identity, "version")
    suffix = _positional(args, 2)
    if suffix is None:
        suffix = settings.sdist_suffix

    fn_project = project if no_normalize else normalize_name(project)
    return f"{_base_url(settings.host)}/source/{project[:1]}/{project}/{fn_project}-{version}{suffix}"


def sdist_fetch_entry(
    *args: str,
    no_normalize: bool = False,
    identity: PackageIdentity | None = None,
    settings: UrlSettings = _DEFAULT_SETTINGS,
) -> FetchEntry:
    """
    sdist_url 的 FetchEntry 形式（sdist 无需重命名）。
    """
    return FetchEntry(url=sdist_url(*args, no_normalize=no_normalize, identity=identity, settings=settings))


def _wheel_parts(
    func: str,
    args: tuple[str, ...],
    identity: PackageIdentity | None,
    settings: UrlSettings,
) -> tuple[str, str, str, str]:
    """
    校验参数数量并解析 (project, version, python_tag, abi_platform_tag)。
    """
    _check_arity(func, args, _WHEEL_MAX_ARGS)
    project = _resolve_identity_field(func, _positional(args, 0), identity, "name")
    version = _resolve_identity_field(func, _positional(args, 1), identity, "version")
    python_tag = _positional(args, 2)
    if python_tag is None:
        python_tag = settings.python_tag
    abi_platform_tag = _positional(args, 3)
    if abi_platform_tag is None:
        abi_platform_tag = settings.abi_platform_tag
    return project, version, python_tag, abi_platform_tag


def _format_wheel_name(project: str, version: str, python_tag: str, abi_platform_tag: str) -> str:
    return f"{normalize_name(project)}-{version}-{python_tag}-{abi_platform_tag}.whl"


def wheel_name(
    *args: str,
    identity: PackageIdentity | None = None,
    settings: UrlSettings = _DEFAULT_SETTINGS,
) -> str:
    """
    构造 wheel 文件名。

    位置参数依次为 project、version、python_tag、abi_platform_tag（最多 4 个），
    缺省值分别取自 identity.name、identity.version、"py3" 与 "none-any"。
    项目名总是规范化。
    """
    return _format_wheel_name(*_wheel_parts("wheel_name", args, identity, settings))


def wheel_fetch_entry(
    *args: str,
    unpack: bool = False,
    identity: PackageIdentity | None = None,
    settings: UrlSettings = _DEFAULT_SETTINGS,
) -> FetchEntry:
    """
    构造 wheel 的拉取项；unpack=True 时附带重命名为 `<filename>.zip` 的指令，
    使通用的归档解包逻辑能识别并解开 wheel。
    """
    project, version, python_tag, abi_platform_tag = _wheel_parts("wheel_url", args, identity, settings)
    filename = _format_wheel_name(project, version, python_tag, abi_platform_tag)
    url = f"{_base_url(settings.host)}/{python_tag}/{project[:1]}/{project}/{filename}"
    return FetchEntry(url=url, rename_to=f"{filename}.zip" if unpack else None)


def wheel_url(
    *args: str,
    unpack: bool = False,
    identity: PackageIdentity | None = None,
    settings: UrlSettings = _DEFAULT_SETTINGS,
) -> str:
    """
    构造 wheel 的下载 URL（unpack=True 时附加 ` -> <filename>.zip`）。
    """
    return wheel_fetch_entry(*args, unpack=unpack, identity=identity, settings=settings).render()
