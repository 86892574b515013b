"""
Settings Manager for LauncherDeps
Handles user preferences for the cache, Heroic location and Wine fallback
"""

import json
import shutil
from pathlib import Path
from typing import Dict, Any, List, Optional

from launcherdeps.utils.logger import get_logger
from launcherdeps.utils.paths import get_cache_dir, get_config_file, get_heroic_config_candidates


class SettingsManager:
    """Manages user settings and preferences"""

    def __init__(self, settings_file: Optional[Path] = None):
        self.logger = get_logger(__name__)
        self.settings_file = Path(settings_file) if settings_file else get_config_file()
        self.settings = self._load_settings()

    def _default_settings(self) -> Dict[str, Any]:
        return {
            "cache_location": str(get_cache_dir()),
            "cache_max_age_days": 7,
            "heroic_config_path": "",  # Empty = auto-detect native, then Flatpak
            "default_wine_path": "",  # Empty = wine from PATH
            "download_timeout": None,  # None = wait for the download to finish
            "language": "en",
            "font_packages": ["arial"]
        }

    def _load_settings(self) -> Dict[str, Any]:
        """Load settings from file, filling in defaults for missing keys"""
        settings = self._default_settings()

        if self.settings_file.exists():
            try:
                with open(self.settings_file, 'r') as f:
                    stored = json.load(f)
                if isinstance(stored, dict):
                    settings.update(stored)
                else:
                    self.logger.warning(f"Ignoring malformed settings file: {self.settings_file}")
            except Exception as e:
                self.logger.warning(f"Failed to load settings: {e}")

        return settings

    def _save_settings(self):
        """Save settings to file"""
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w') as f:
                json.dump(self.settings, f, indent=2)
        except Exception as e:
            self.logger.error(f"Failed to save settings: {e}")

    def get_cache_location(self) -> Path:
        """Get the cache directory"""
        return Path(self.settings.get("cache_location") or get_cache_dir()).expanduser()

    def set_cache_location(self, path: str):
        self.settings["cache_location"] = path
        self._save_settings()
        self.logger.info(f"Cache location: {path}")

    def get_cache_max_age_days(self) -> float:
        """Get the freshness window for cached installers"""
        value = self.settings.get("cache_max_age_days", 7)
        try:
            days = float(value)
        except (TypeError, ValueError):
            self.logger.warning(f"Invalid cache_max_age_days {value!r}, using 7")
            return 7
        if days < 0:
            self.logger.warning(f"Negative cache_max_age_days {value!r}, using 7")
            return 7
        return days

    def set_cache_max_age_days(self, days: float):
        self.settings["cache_max_age_days"] = days
        self._save_settings()
        self.logger.info(f"Cache max age: {days} days")

    def get_heroic_config_path(self) -> Optional[Path]:
        """Get Heroic config directory (custom or auto-detected)"""
        custom = self.settings.get("heroic_config_path")
        if custom:
            custom_path = Path(custom).expanduser()
            if custom_path.exists():
                return custom_path
            self.logger.warning(f"Custom Heroic config path does not exist: {custom}")

        for candidate in get_heroic_config_candidates():
            if candidate.exists():
                self.logger.debug(f"Found Heroic config: {candidate}")
                return candidate

        return None

    def set_heroic_config_path(self, path: str):
        self.settings["heroic_config_path"] = path
        self._save_settings()
        self.logger.info(f"Set Heroic config path: {path}")

    def get_default_wine_path(self) -> Optional[str]:
        """Get fallback Wine binary for games without a configured version"""
        custom = self.settings.get("default_wine_path")
        if custom:
            if Path(custom).exists():
                return custom
            self.logger.warning(f"Custom Wine path does not exist: {custom}")

        wine_path = shutil.which("wine")
        if wine_path:
            self.logger.debug(f"Found Wine in PATH: {wine_path}")
        return wine_path

    def get_download_timeout(self) -> Optional[float]:
        return self.settings.get("download_timeout")

    def get_language(self) -> str:
        return self.settings.get("language") or "en"

    def set_language(self, language: str):
        self.settings["language"] = language
        self._save_settings()
        self.logger.info(f"Language: {language}")

    def get_font_packages(self) -> List[str]:
        """Winetricks verbs installed alongside the launcher"""
        packages = self.settings.get("font_packages")
        if not packages:
            return ["arial"]
        return list(packages)
