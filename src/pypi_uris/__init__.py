from __future__ import annotations

from pypi_uris.errors import RecipeError, UsageError
from pypi_uris.models import ArtifactKind, FetchEntry, PackageIdentity
from pypi_uris.names import normalize_name
from pypi_uris.urls import UrlSettings, sdist_url, wheel_name, wheel_url
from pypi_uris.versions import translate_version

__version__ = "0.3.0"

__all__ = [
    "ArtifactKind",
    "FetchEntry",
    "PackageIdentity",
    "RecipeError",
    "UrlSettings",
    "UsageError",
    "normalize_name",
    "sdist_url",
    "translate_version",
    "wheel_name",
    "wheel_url",
]
