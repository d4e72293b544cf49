from __future__ import annotations

from typing import TYPE_CHECKING

from dtm.core.result import Err, Ok, Result
from dtm.output.console import ConsoleProtocol, Style
from dtm.platform.detection import supports_unix_permissions
from dtm.toolchain.activator import ActivateError, Activator
from dtm.toolchain.catalog import Catalog
from dtm.toolchain.errors import IOFailure, ToolchainError
from dtm.toolchain.http import RealHttpClient
from dtm.toolchain.installer import InstalledVersion, Installer
from dtm.toolchain.registry import GitHubRegistry
from dtm.toolchain.resolver import ReleaseResolver

if TYPE_CHECKING:
    from dtm.core.config import Config
    from dtm.output.progress import ProgressReporter
    from dtm.toolchain.http import HttpClient
    from dtm.toolchain.layout import StorageLayout
    from dtm.toolchain.registry import ReleaseRegistry


class ToolchainService:
    """Runs the install / list / use commands against one toolchain home.

    Collaborators default to the real GitHub registry over urllib; tests pass
    MockHttpClient / MockRegistry instead.
    """

    def __init__(
        self,
        *,
        layout: StorageLayout,
        config: Config,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
        registry: ReleaseRegistry | None = None,
        progress: ProgressReporter | None = None,
        unix_permissions: bool | None = None,
    ) -> None:
        self._layout = layout
        self._config = config
        self._console = console
        self._http = http or RealHttpClient()
        self._registry = registry or GitHubRegistry(self._http, config.repo)
        self._progress = progress
        self._unix_permissions = (
            supports_unix_permissions() if unix_permissions is None else unix_permissions
        )

        self._catalog = Catalog(layout, tag_prefix=config.tag_prefix)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def install(self, version: str | None) -> Result[InstalledVersion, ToolchainError]:
        """Resolve and install a version (latest when None)."""
        if version is None:
            self._console.print("Installing latest Djinn version")
        else:
            self._console.print(f"Installing Djinn version '{version}'")

        resolver = ReleaseResolver(self._registry, tag_prefix=self._config.tag_prefix)
        installer = Installer(
            self._layout,
            self._http,
            launch_command=self._config.launch_command,
            artifact_extension=self._config.artifact_extension,
            unix_permissions=self._unix_permissions,
            progress=self._progress,
        )

        result = resolver.resolve(version).flat_map(installer.install)
        if isinstance(result, Err):
            self._console.print(
                f"Unable to install version '{version or 'latest'}'", Style.ERROR
            )
            return result

        self._console.success(f"Installed Djinn CLI at {result.value.directory}")
        return result

    def list_versions(self) -> Result[list[str], IOFailure]:
        """Print the toolchain home and every installed version."""
        listed = self._catalog.list_installed()
        if isinstance(listed, Err):
            return listed

        active = self._activator().current()

        self._console.print("toolchain home:")
        self._console.print(f"-> {self._layout.home}")
        self._console.newline()
        self._console.print("all installed versions:")
        for tag in listed.value:
            marker = " (active)" if tag == active else ""
            self._console.print(f"-> djinn toolchain {self._catalog.display(tag)}{marker}")
        self._console.newline()
        return Ok(listed.value)

    def use(self, version: str) -> Result[str, ActivateError]:
        """Activate an installed version."""
        result = self._activator().activate(version)
        if isinstance(result, Ok):
            self._console.success(f"Using Djinn toolchain {self._catalog.display(result.value)}")
        return result

    def _activator(self) -> Activator:
        return Activator(self._layout, self._catalog, unix_permissions=self._unix_permissions)
