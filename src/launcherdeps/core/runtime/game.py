"""
Game runtime

A Game wraps the install metadata of one Heroic game together with a loader
for its current Wine settings, and knows how to run commands inside the
game's prefix and translate Windows paths to host paths.
"""

import os
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PureWindowsPath
from typing import Callable, Dict, List, Optional

from launcherdeps.utils.logger import get_logger


class Runner(Enum):
    """Store backend a game was installed through"""
    LEGENDARY = "legendary"
    GOG = "gog"
    NILE = "nile"
    SIDELOAD = "sideload"


@dataclass
class InstallInfo:
    """Install metadata reported by the store backend"""
    executable: str = ""
    install_path: str = ""
    is_dlc: bool = False
    version: Optional[str] = None


@dataclass
class GameInfo:
    """Information about an installed game"""
    app_name: str
    title: str
    runner: Runner
    install: InstallInfo = field(default_factory=InstallInfo)


@dataclass
class WineVersion:
    """Wine or Proton build selected for a game"""
    bin: str
    name: str = ""
    type: str = "wine"

    @property
    def is_proton(self) -> bool:
        return self.type == "proton"


@dataclass
class GameSettings:
    """Per-game compatibility settings"""
    wine_version: WineVersion
    wine_prefix: str


class WineCommandError(Exception):
    """A command run inside a prefix could not be started or exited non-zero"""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class Game:
    """An installed game and its compatibility prefix"""

    def __init__(self, info: GameInfo, settings_loader: Callable[[], GameSettings],
                 steam_root: Optional[str] = None):
        self.logger = get_logger(__name__)
        self.info = info
        self._settings_loader = settings_loader
        self.steam_root = steam_root or ""

    @property
    def app_name(self) -> str:
        return self.info.app_name

    @property
    def runner(self) -> Runner:
        return self.info.runner

    def get_game_info(self) -> GameInfo:
        return self.info

    def get_settings(self) -> GameSettings:
        """Load the current settings; never cached since users can change them at any time"""
        return self._settings_loader()

    def _prefix_root(self, settings: GameSettings) -> Path:
        """Directory that contains drive_c (Proton keeps it under pfx/)"""
        prefix = Path(settings.wine_prefix).expanduser()
        if settings.wine_version.is_proton or (prefix / "pfx").is_dir():
            return prefix / "pfx"
        return prefix

    def _build_env(self, settings: GameSettings, extra_env: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        env = os.environ.copy()
        prefix = str(Path(settings.wine_prefix).expanduser())

        if settings.wine_version.is_proton:
            env["STEAM_COMPAT_DATA_PATH"] = prefix
            env["STEAM_COMPAT_CLIENT_INSTALL_PATH"] = self.steam_root
            env["WINEPREFIX"] = str(self._prefix_root(settings))
        else:
            env["WINEPREFIX"] = prefix

        if extra_env:
            env.update(extra_env)
        return env

    def _build_command(self, settings: GameSettings, command_parts: List[str]) -> List[str]:
        wine_bin = settings.wine_version.bin
        if settings.wine_version.is_proton:
            return [wine_bin, "runinprefix"] + list(command_parts)
        return [wine_bin] + list(command_parts)

    def run_wine_command(self, command_parts: List[str], env: Optional[Dict[str, str]] = None,
                         settings: Optional[GameSettings] = None) -> subprocess.CompletedProcess:
        """
        Run a command inside the game's prefix

        Args:
            command_parts: Executable and arguments, e.g. ["setup.exe", "/S"]
            env: Extra environment variables
            settings: Settings to use instead of loading them again

        Returns:
            The completed process

        Raises:
            WineCommandError: The Wine binary is missing or the command exited non-zero
        """
        settings = settings or self.get_settings()
        cmd = self._build_command(settings, command_parts)
        run_env = self._build_env(settings, env)

        self.logger.info(f"Running in prefix {settings.wine_prefix}: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, env=run_env, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise WineCommandError(f"Wine binary not found: {settings.wine_version.bin}") from e
        except OSError as e:
            raise WineCommandError(f"Could not start {cmd[0]}: {e}") from e

        if result.returncode != 0:
            stderr_tail = "\n".join(result.stderr.strip().splitlines()[-10:]) if result.stderr else ""
            raise WineCommandError(
                f"{command_parts[0]} exited with code {result.returncode}",
                returncode=result.returncode,
                stderr=stderr_tail
            )

        return result

    def get_wine_path(self, windows_path: str, settings: Optional[GameSettings] = None) -> str:
        """
        Translate a Windows path inside the prefix to a host path

        Uses winepath from the game's Wine build; when that fails the path is
        mapped onto the prefix's drive_c directly.

        Returns:
            Host path, or an empty string if the path cannot be translated
        """
        settings = settings or self.get_settings()

        try:
            result = self.run_wine_command(
                ["winepath", "-u", windows_path],
                env={"WINEDEBUG": "-all"},
                settings=settings
            )
            lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
            if lines:
                return lines[-1]
            self.logger.warning(f"winepath returned no output for {windows_path}")
        except WineCommandError as e:
            self.logger.warning(f"winepath failed for {windows_path}: {e}")

        return self._map_to_prefix(windows_path, settings)

    def _map_to_prefix(self, windows_path: str, settings: GameSettings) -> str:
        win_path = PureWindowsPath(windows_path.replace("/", "\\"))
        drive = win_path.drive.lower()
        if not drive or not drive.endswith(":") or not settings.wine_prefix:
            self.logger.warning(f"Cannot map {windows_path} onto the prefix")
            return ""

        prefix_root = self._prefix_root(settings)
        if drive == "c:":
            base = prefix_root / "drive_c"
        else:
            base = prefix_root / "dosdevices" / drive

        return str(base.joinpath(*win_path.parts[1:]))
