"""
Core module
Wires settings, the game library and the launcher setup together
"""

from typing import Any, Callable, Dict, List, Optional

from launcherdeps import __version__, __version_date__
from launcherdeps.core.dialogs import DialogService
from launcherdeps.core.installers.launcher_installer import LauncherDependencyInstaller
from launcherdeps.core.installers.utils.cache_store import CacheStore, FetchResult
from launcherdeps.core.installers.utils.winetricks_manager import WinetricksManager
from launcherdeps.core.notifications import FrontendNotifier
from launcherdeps.core.runtime.game import GameInfo
from launcherdeps.core.runtime.library import GameLibrary
from launcherdeps.core.setup_coordinator import SetupCoordinator
from launcherdeps.utils.i18n import Translator
from launcherdeps.utils.logger import get_logger
from launcherdeps.utils.settings_manager import SettingsManager


class Core:
    """Core functionality for LauncherDeps"""

    def __init__(self, settings_manager: Optional[SettingsManager] = None,
                 library: Optional[GameLibrary] = None,
                 notifier: Optional[FrontendNotifier] = None,
                 dialogs: Optional[DialogService] = None):
        self.logger = get_logger(__name__)
        self.settings = settings_manager or SettingsManager()

        self.cache_store = CacheStore(
            self.settings.get_cache_location(),
            max_age_days=self.settings.get_cache_max_age_days(),
            timeout=self.settings.get_download_timeout()
        )
        self.library = library or GameLibrary(self.settings)
        self.notifier = notifier or FrontendNotifier()
        self.dialogs = dialogs or DialogService()
        self.translator = Translator(self.settings.get_language())

        self.winetricks = WinetricksManager(self.cache_store)
        self.launcher_installer = LauncherDependencyInstaller(
            self.cache_store, self.dialogs, self.translator
        )
        self.setup_coordinator = SetupCoordinator(
            self.library,
            self.launcher_installer,
            self.winetricks,
            self.notifier,
            font_packages=self.settings.get_font_packages()
        )

    def get_version_info(self):
        return __version__, __version_date__

    def setup_game(self, app_name: str):
        """Run the launcher setup for a game"""
        self.setup_coordinator.maybe_setup_dependency(app_name)

    def check_game(self, app_name: str) -> Optional[bool]:
        """Whether the launcher is installed for a game, None if the game is unknown"""
        game = self.library.get(app_name)
        if game is None:
            return None
        return self.launcher_installer.is_installed(game)

    def get_games_needing_launcher(self) -> List[GameInfo]:
        return [info for info in self.library.list_games()
                if self.launcher_installer.requires_dependency(info)]

    def cache_installer(self, force: bool = False,
                        progress_callback: Optional[Callable] = None) -> FetchResult:
        """Download the launcher installer into the cache, reporting progress if a callback is given"""
        previous = self.launcher_installer.progress_callback
        if progress_callback:
            self.launcher_installer.set_progress_callback(progress_callback)
        try:
            return self.launcher_installer.fetch_installer(force=force)
        finally:
            self.launcher_installer.progress_callback = previous

    def get_cache_status(self) -> Dict[str, Any]:
        return self.cache_store.get_cache_status()

    def clear_cache(self) -> int:
        return self.cache_store.clear()
