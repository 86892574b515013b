"""
Launcher Dependency Installer

Installs a launcher (Ubisoft Connect) into a game's prefix. The installer's
exit status is only advisory: whether the launcher is installed is always
decided by probing the prefix for the launcher executable.
"""

from pathlib import Path, PureWindowsPath
from typing import Optional

from launcherdeps.core.dialogs import DialogService
from launcherdeps.core.installers.base.base_installer import BaseInstaller
from launcherdeps.core.installers.dependency import LauncherDependency, UBISOFT_CONNECT
from launcherdeps.core.installers.utils.cache_store import CacheStore, FetchResult
from launcherdeps.core.runtime.game import Game, GameInfo, WineCommandError
from launcherdeps.utils.i18n import Translator


class LauncherDependencyInstaller(BaseInstaller):
    """Probes for and installs a launcher dependency inside game prefixes"""

    def __init__(self, cache_store: CacheStore, dialogs: DialogService,
                 translator: Optional[Translator] = None,
                 dependency: LauncherDependency = UBISOFT_CONNECT):
        super().__init__()
        self.cache_store = cache_store
        self.dialogs = dialogs
        self.translator = translator or Translator()
        self.dependency = dependency

    def requires_dependency(self, game_info: Optional[GameInfo]) -> bool:
        """Check whether the game launches through the dependency's launcher binary"""
        if game_info is None or not game_info.install.executable:
            return False
        executable_name = PureWindowsPath(game_info.install.executable.replace("/", "\\")).name
        return executable_name.lower() == self.dependency.trigger_executable.lower()

    def is_installed(self, game: Game) -> bool:
        """Check the game's prefix for the launcher executable"""
        settings = game.get_settings()
        host_path = game.get_wine_path(self.dependency.guest_executable_path, settings)

        installed = bool(host_path) and Path(host_path).exists()
        self.logger.debug(f"{self.dependency.display_name} installed in {settings.wine_prefix}: {installed}")
        return installed

    def fetch_installer(self, force: bool = False) -> FetchResult:
        """Make sure a fresh installer is in the cache"""
        return self.cache_store.ensure_cached(
            self.dependency.key,
            self.dependency.installer_url,
            force=force,
            progress_callback=self._send_progress_update
        )

    def run_installer(self, game: Game) -> bool:
        """
        Run the cached installer silently in the game's prefix

        Returns:
            True if the installer exited cleanly. This is advisory only.
        """
        installer_path = self.cache_store.path_for(self.dependency.key)
        self._log_progress(f"Installing {self.dependency.display_name} in {game.get_game_info().title}...")

        try:
            game.run_wine_command([str(installer_path)] + list(self.dependency.silent_args))
        except WineCommandError as e:
            self.logger.warning(f"Error installing {self.dependency.display_name}: {e}")
            if e.stderr:
                self.logger.debug(f"Installer stderr: {e.stderr}")
            return False
        except Exception as e:
            self.logger.warning(f"Error installing {self.dependency.display_name}: {e}")
            return False

        return True

    def install(self, game: Game) -> bool:
        """
        Install the launcher and confirm by probing the prefix

        Returns:
            True if the launcher is installed afterwards
        """
        result = self.fetch_installer()
        if not result.success:
            self.logger.warning(f"Failed to download {self.dependency.installer_url}: {result.error}")

        self.run_installer(game)

        try:
            installed = self.is_installed(game)
        except Exception as e:
            self.logger.warning(f"Could not check {self.dependency.display_name} installation: {e}")
            installed = False

        if installed:
            self._log_progress(f"[OK] {self.dependency.display_name} installed")
            return True

        self._report_failure()
        return False

    def _report_failure(self):
        title = self.translator.t(self.dependency.error_title_key, self.dependency.display_name)
        message = self.translator.t(self.dependency.error_message_key, self.dependency.error_message_default)
        self.dialogs.show_error(title, message)
