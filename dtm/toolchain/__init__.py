"""Toolchain state: layout, resolution, installation, catalog, activation.

- Storage layout of the toolchain home (layout.py)
- Release registry and HTTP transport (registry.py, http.py)
- Release resolution (resolver.py)
- Download and shim generation (installer.py, shims.py)
- Installed version listing (catalog.py)
- Active version switching (activator.py)
"""

from dtm.toolchain.activator import ActivateError, Activator
from dtm.toolchain.catalog import Catalog
from dtm.toolchain.errors import (
    IOFailure,
    NetworkFailure,
    NoAssetFailure,
    NotFound,
    NotInstalled,
    RegistryError,
    ToolchainError,
)
from dtm.toolchain.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from dtm.toolchain.installer import InstalledVersion, InstallError, Installer
from dtm.toolchain.layout import StorageLayout
from dtm.toolchain.registry import GitHubRegistry, MockRegistry, ReleaseDescriptor, ReleaseRegistry
from dtm.toolchain.resolver import ReleaseResolver, ResolveError
from dtm.toolchain.shims import ShimPair, ShimWriter
from dtm.toolchain.tags import display_form, to_tag

__all__ = [
    # Layout
    "StorageLayout",
    # Errors
    "IOFailure",
    "NetworkFailure",
    "NoAssetFailure",
    "NotFound",
    "NotInstalled",
    "RegistryError",
    "ToolchainError",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # Registry
    "GitHubRegistry",
    "MockRegistry",
    "ReleaseDescriptor",
    "ReleaseRegistry",
    # Resolve
    "ReleaseResolver",
    "ResolveError",
    # Install
    "Installer",
    "InstalledVersion",
    "InstallError",
    "ShimPair",
    "ShimWriter",
    # Catalog / activation
    "Catalog",
    "Activator",
    "ActivateError",
    # Tags
    "display_form",
    "to_tag",
]
