"""
Central paths helper
Provides path resolution for LauncherDeps and Heroic directories
"""

import os
from pathlib import Path
from typing import List


def get_app_home() -> Path:
    """
    Get the LauncherDeps home directory path

    Defaults to ~/LauncherDeps, overridable with LAUNCHERDEPS_HOME.
    All code should use this instead of hardcoding Path.home() / "LauncherDeps".
    """
    override = os.environ.get("LAUNCHERDEPS_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "LauncherDeps"


def get_cache_dir() -> Path:
    """Get cache directory path"""
    return get_app_home() / "cache"


def get_logs_dir() -> Path:
    """Get logs directory path"""
    return get_app_home() / "logs"


def get_locales_dir() -> Path:
    """Get directory holding user translation catalogs"""
    return get_app_home() / "locales"


def get_config_file() -> Path:
    """Get the settings file path (LAUNCHERDEPS_CONFIG overrides it)"""
    override = os.environ.get("LAUNCHERDEPS_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "launcherdeps" / "settings.json"


def get_heroic_config_candidates() -> List[Path]:
    """Native and Flatpak Heroic configuration directories, in priority order"""
    return [
        Path.home() / ".config" / "heroic",
        Path.home() / ".var" / "app" / "com.heroicgameslauncher.hgl" / "config" / "heroic"
    ]


def get_steam_root_candidates() -> List[Path]:
    """Common Steam installation directories"""
    home_dir = Path.home()
    return [
        home_dir / ".local" / "share" / "Steam",
        home_dir / ".steam" / "steam",
        home_dir / ".steam" / "debian-installation",
    ]
