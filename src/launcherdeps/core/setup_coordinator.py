"""
Launcher setup coordinator

Entry point run before a game launches: decides whether the game needs its
launcher installed and, if so, installs it while fonts are installed in
parallel.
"""

from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional

from launcherdeps.core.installers.launcher_installer import LauncherDependencyInstaller
from launcherdeps.core.installers.utils.winetricks_manager import WinetricksManager
from launcherdeps.core.notifications import FrontendNotifier, StatusEvent, STATUS_INSTALLING_DEPENDENCY
from launcherdeps.core.runtime.game import Game
from launcherdeps.core.runtime.library import GameLibrary
from launcherdeps.utils.logger import get_logger


class SetupCoordinator:
    """Runs the launcher dependency setup for one game at a time"""

    def __init__(self, library: GameLibrary, installer: LauncherDependencyInstaller,
                 winetricks: WinetricksManager, notifier: FrontendNotifier,
                 font_packages: Optional[List[str]] = None):
        self.logger = get_logger(__name__)
        self.library = library
        self.installer = installer
        self.winetricks = winetricks
        self.notifier = notifier
        self.font_packages = font_packages or ["arial"]

    def _resolve(self, app_name: str) -> Optional[Game]:
        """Find the game and check it needs the launcher and doesn't have it yet"""
        game = self.library.get(app_name)
        if game is None:
            return None

        game_info = game.get_game_info()
        if not self.installer.requires_dependency(game_info):
            self.logger.debug(f"{app_name} does not need {self.installer.dependency.display_name}")
            return None

        if self.installer.is_installed(game):
            self.logger.debug(f"{self.installer.dependency.display_name} already installed for {app_name}")
            return None

        return game

    def maybe_setup_dependency(self, app_name: str):
        """
        Install the launcher for a game if it needs it

        Lookup misses and games that don't need the launcher are silent
        no-ops. Font installation failures are raised once both the
        installer and the font task have finished.
        """
        try:
            game = self._resolve(app_name)
        except Exception as e:
            self.logger.warning(f"Could not check launcher setup for {app_name}: {e}")
            return

        if game is None:
            return

        self.notifier.send_status(StatusEvent(
            app_name=app_name,
            runner=game.runner.value,
            status=STATUS_INSTALLING_DEPENDENCY
        ))

        # Independent tasks, no ordering between them
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="launcher-setup") as executor:
            install_future = executor.submit(self.installer.install, game)
            fonts_future = executor.submit(self.install_fonts, game)
            wait([install_future, fonts_future])

        try:
            installed = install_future.result()
            self.logger.info(f"{self.installer.dependency.display_name} setup for {app_name} finished: "
                             f"{'installed' if installed else 'failed'}")
        except Exception as e:
            self.logger.error(f"{self.installer.dependency.display_name} setup for {app_name} crashed: {e}")

        # TODO: decide with the frontend whether font failures should be reported like installer failures
        fonts_future.result()

    def install_fonts(self, game: Game):
        """Install the font packages into the game's prefix; failures propagate"""
        settings = game.get_settings()
        self.winetricks.run_with_args(settings.wine_version, settings.wine_prefix, self.font_packages)
