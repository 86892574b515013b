"""
Heroic game library

Reads Epic (legendary) installs and per-game Wine settings from the Heroic
configuration directory.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from launcherdeps.core.runtime.game import Game, GameInfo, GameSettings, InstallInfo, Runner, WineVersion
from launcherdeps.utils.logger import get_logger
from launcherdeps.utils.paths import get_steam_root_candidates

# Characters Heroic drops from a title when it names the default prefix folder
PREFIX_NAME_STRIP = re.compile(r"""[:|/*?<>\\&{}%$@`!™+'"®]""")


def prefix_folder_name(title: str) -> str:
    """Folder name Heroic gives a game's prefix under the default prefix directory"""
    return PREFIX_NAME_STRIP.sub("", title)


class GameLibrary:
    """Looks up installed Heroic games by app name"""

    def __init__(self, settings_manager=None, heroic_config_path: Optional[Path] = None,
                 steam_root: Optional[str] = None):
        self.logger = get_logger(__name__)
        self.settings_manager = settings_manager

        if heroic_config_path is None and settings_manager is not None:
            heroic_config_path = settings_manager.get_heroic_config_path()
        self.heroic_config_path = Path(heroic_config_path) if heroic_config_path else None

        self.steam_root = steam_root if steam_root is not None else self._find_steam_root()

    def _find_steam_root(self) -> str:
        for candidate in get_steam_root_candidates():
            if candidate.exists():
                return str(candidate)
        return ""

    def _read_json(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except Exception as e:
            self.logger.warning(f"Failed to parse {path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _load_installed(self) -> Dict[str, Dict[str, Any]]:
        """Installed Epic games keyed by app name"""
        if not self.heroic_config_path:
            return {}

        installed_file = self.heroic_config_path / "legendaryConfig" / "legendary" / "installed.json"
        data = self._read_json(installed_file)
        return {app_name: entry for app_name, entry in data.items() if isinstance(entry, dict)}

    def _game_info_from_entry(self, app_name: str, entry: Dict[str, Any]) -> GameInfo:
        return GameInfo(
            app_name=entry.get('app_name', app_name),
            title=entry.get('title', app_name),
            runner=Runner.LEGENDARY,
            install=InstallInfo(
                executable=entry.get('executable', ''),
                install_path=entry.get('install_path', ''),
                is_dlc=bool(entry.get('is_dlc', False)),
                version=entry.get('version')
            )
        )

    def list_games(self) -> List[GameInfo]:
        """All installed Epic games"""
        games = [self._game_info_from_entry(app_name, entry)
                 for app_name, entry in self._load_installed().items()]
        self.logger.debug(f"Found {len(games)} installed Heroic (Epic) games")
        return games

    def load_game_settings(self, app_name: str, title: str = "") -> GameSettings:
        """
        Resolve a game's Wine settings

        Per-game values in GamesConfig/<app>.json take precedence over
        defaultSettings from config.json.
        """
        defaults: Dict[str, Any] = {}
        game_config: Dict[str, Any] = {}

        if self.heroic_config_path:
            global_config = self._read_json(self.heroic_config_path / "config.json")
            defaults = global_config.get("defaultSettings", {}) or {}

            per_game = self._read_json(self.heroic_config_path / "GamesConfig" / f"{app_name}.json")
            game_config = per_game.get(app_name, {}) or {}

        wine_version_data = game_config.get("wineVersion") or defaults.get("wineVersion") or {}
        wine_bin = wine_version_data.get("bin", "")
        if not wine_bin and self.settings_manager is not None:
            wine_bin = self.settings_manager.get_default_wine_path() or ""
        wine_version = WineVersion(
            bin=wine_bin or "wine",
            name=wine_version_data.get("name", ""),
            type=wine_version_data.get("type", "wine")
        )

        wine_prefix = game_config.get("winePrefix")
        if not wine_prefix:
            default_prefix = defaults.get("winePrefix") or str(Path.home() / "Games" / "Heroic" / "Prefixes" / "default")
            wine_prefix = str(Path(default_prefix).expanduser() / prefix_folder_name(title or app_name))

        return GameSettings(wine_version=wine_version, wine_prefix=str(Path(wine_prefix).expanduser()))

    def get(self, app_name: str) -> Optional[Game]:
        """Get an installed game, or None when it is not installed"""
        entry = self._load_installed().get(app_name)
        if entry is None:
            self.logger.debug(f"Game not found in Heroic library: {app_name}")
            return None

        info = self._game_info_from_entry(app_name, entry)
        return Game(
            info,
            settings_loader=lambda: self.load_game_settings(app_name, info.title),
            steam_root=self.steam_root
        )
