from __future__ import annotations

import pytest

from pypi_uris.errors import UsageError
from pypi_uris.models import PackageIdentity
from pypi_uris.urls import (
    UrlSettings,
    sdist_fetch_entry,
    sdist_url,
    wheel_fetch_entry,
    wheel_name,
    wheel_url,
)

BASE = "https://files.pythonhosted.org/packages"


def test_sdist_url_normalizes_filename_but_not_path() -> None:
    """
    首字母目录与项目目录使用原始名称，文件名使用规范化名称。
    """
    assert sdist_url("Foo.Bar", "1.0") == f"{BASE}/source/F/Foo.Bar/foo_bar-1.0.tar.gz"


def test_sdist_url_no_normalize_keeps_raw_name() -> None:
    """
    no_normalize=True 时文件名保留原始项目名。
    """
    assert sdist_url("Foo.Bar", "1.0", ".zip", no_normalize=True) == f"{BASE}/source/F/Foo.Bar/Foo.Bar-1.0.zip"


def test_sdist_url_defaults_from_identity() -> None:
    """
    未给出位置参数时，project/version 取自 identity，后缀取 .tar.gz。
    """
    ident = PackageIdentity(name="zope.interface", version="6.4.post2")
    assert sdist_url(identity=ident) == f"{BASE}/source/z/zope.interface/zope_interface-6.4.post2.tar.gz"
    assert sdist_url("other", identity=ident) == f"{BASE}/source/o/other/other-6.4.post2.tar.gz"


def test_sdist_url_uses_settings_host_and_suffix() -> None:
    """
    settings 中的主机名与缺省后缀应生效，显式后缀优先。
    """
    settings = UrlSettings(host="mirror.test", sdist_suffix=".tar.bz2")
    assert sdist_url("foo", "1", settings=settings) == "https://mirror.test/packages/source/f/foo/foo-1.tar.bz2"
    assert sdist_url("foo", "1", ".zip", settings=settings).endswith("/foo-1.zip")


def test_sdist_url_too_many_args_raises_usage_error() -> None:
    """
    超过 3 个位置参数应抛出 UsageError。
    """
    with pytest.raises(UsageError, match="sdist_url"):
        sdist_url("a", "1", ".tar.gz", "extra")


def test_sdist_url_without_identity_raises_usage_error() -> None:
    """
    缺省值需要 identity 却未提供时应抛出 UsageError。
    """
    with pytest.raises(UsageError):
        sdist_url()
    with pytest.raises(UsageError):
        sdist_url("foo")


def test_sdist_fetch_entry_has_no_rename() -> None:
    entry = sdist_fetch_entry("foo", "1")
    assert entry.rename_to is None
    assert entry.render() == f"{BASE}/source/f/foo/foo-1.tar.gz"


def test_wheel_name_defaults() -> None:
    """
    wheel 文件名缺省使用 py3 与 none-any 标签，项目名总是规范化。
    """
    assert wheel_name("My-Pkg", "2.3") == "my_pkg-2.3-py3-none-any.whl"


def test_wheel_name_explicit_tags_and_identity() -> None:
    ident = PackageIdentity(name="Ninja", version="1.11.1.1")
    assert wheel_name(identity=ident) == "ninja-1.11.1.1-py3-none-any.whl"
    assert (
        wheel_name("ninja", "1.11.1.1", "py2.py3", "none-manylinux1_x86_64")
        == "ninja-1.11.1.1-py2.py3-none-manylinux1_x86_64.whl"
    )


def test_wheel_name_too_many_args_raises_usage_error() -> None:
    """
    超过 4 个位置参数应抛出 UsageError。
    """
    with pytest.raises(UsageError, match="wheel_name"):
        wheel_name("a", "1", "py3", "none-any", "extra")


def test_wheel_url_with_unpack_appends_rename() -> None:
    """
    unpack=True 时应附加 ` -> <filename>.zip` 重命名指令。
    """
    assert wheel_url("My-Pkg", "2.3", unpack=True) == (
        f"{BASE}/py3/M/My-Pkg/my_pkg-2.3-py3-none-any.whl -> my_pkg-2.3-py3-none-any.whl.zip"
    )


def test_wheel_url_without_unpack() -> None:
    assert wheel_url("My-Pkg", "2.3", "cp312", "cp312-manylinux_2_17_x86_64") == (
        f"{BASE}/cp312/M/My-Pkg/my_pkg-2.3-cp312-cp312-manylinux_2_17_x86_64.whl"
    )


def test_wheel_fetch_entry_fields() -> None:
    entry = wheel_fetch_entry("flit_core", "3.9.0", unpack=True)
    assert entry.url == f"{BASE}/py3/f/flit_core/flit_core-3.9.0-py3-none-any.whl"
    assert entry.rename_to == "flit_core-3.9.0-py3-none-any.whl.zip"


def test_wheel_url_too_many_args_raises_usage_error() -> None:
    with pytest.raises(UsageError, match="wheel_url"):
        wheel_url("a", "1", "py3", "none-any", "extra", unpack=True)
