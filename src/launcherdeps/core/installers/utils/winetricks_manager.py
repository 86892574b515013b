"""
Winetricks Manager

This module provides winetricks for installing packages (fonts) into game
prefixes. It handles downloading, caching, locating and running winetricks.
"""

import os
import shutil
import stat
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from launcherdeps.core.installers.utils.cache_store import CacheStore
from launcherdeps.core.runtime.game import WineVersion
from launcherdeps.utils.logger import get_logger


class WinetricksError(Exception):
    """Winetricks could not be obtained or failed to install a package"""


class WinetricksManager:
    """
    Manages winetricks download, caching, and execution

    It handles:
    - Downloading latest winetricks from GitHub
    - Caching winetricks locally (expires with the cache store's window)
    - Falling back to a system winetricks when the download fails
    - Running winetricks verbs against a prefix with a given Wine/Proton build
    """

    # GitHub URL for latest winetricks
    WINETRICKS_URL = "https://raw.githubusercontent.com/Winetricks/winetricks/master/src/winetricks"
    CACHE_KEY = "winetricks"

    def __init__(self, cache_store: CacheStore):
        """Initialize winetricks manager"""
        self.logger = get_logger(__name__)
        self.cache_store = cache_store

    def get_winetricks(self) -> Optional[str]:
        """
        Get winetricks command path

        Priority order:
        1. Cached winetricks (downloaded from GitHub, refreshed when stale)
        2. A stale cached copy if the refresh failed
        3. winetricks from PATH

        Returns:
            Path to winetricks command, or None if not available
        """
        result = self.cache_store.ensure_cached(self.CACHE_KEY, self.WINETRICKS_URL)
        cached = result.path

        if result.success or cached.exists():
            if not result.success:
                self.logger.info("Using existing cached winetricks despite update failure")
            self._make_executable(cached)
            self.logger.info(f"Using cached winetricks: {cached}")
            return str(cached)

        system_winetricks = shutil.which("winetricks")
        if system_winetricks:
            self.logger.info(f"Using system winetricks: {system_winetricks}")
            return system_winetricks

        self.logger.error("Failed to get winetricks - download unsuccessful and none installed")
        return None

    def _make_executable(self, path: Path):
        mode = path.stat().st_mode
        if not mode & stat.S_IEXEC:
            path.chmod(mode | stat.S_IEXEC)

    def _resolve_wine_binaries(self, wine_version: WineVersion) -> Tuple[str, Optional[str]]:
        """Get the wine and wineserver binaries winetricks should use"""
        if wine_version.is_proton:
            proton_dir = Path(wine_version.bin).parent
            for bin_dir in (proton_dir / "files" / "bin", proton_dir / "dist" / "bin"):
                if (bin_dir / "wine").exists():
                    return str(bin_dir / "wine"), str(bin_dir / "wineserver")
            self.logger.warning(f"Could not find wine inside Proton build {proton_dir}")
            return str(proton_dir / "files" / "bin" / "wine"), str(proton_dir / "files" / "bin" / "wineserver")

        wine_bin = wine_version.bin
        wineserver = Path(wine_bin).parent / "wineserver"
        return wine_bin, str(wineserver) if wineserver.exists() else None

    def _build_env(self, wine_version: WineVersion, wine_prefix: str) -> dict:
        env = os.environ.copy()
        wine_bin, wineserver = self._resolve_wine_binaries(wine_version)

        prefix = Path(wine_prefix).expanduser()
        if wine_version.is_proton:
            prefix = prefix / "pfx"

        env["WINE"] = wine_bin
        env["WINEPREFIX"] = str(prefix)
        env["WINETRICKS_LATEST_VERSION_CHECK"] = "disabled"
        env["W_CACHE"] = str(self.cache_store.cache_dir / "winetricks-cache")

        if wineserver:
            env["WINESERVER"] = wineserver
            bin_dir = os.path.dirname(wine_bin)
            env["PATH"] = f"{bin_dir}:{env.get('PATH', '')}"

        return env

    def run_with_args(self, wine_version: WineVersion, wine_prefix: str, args: List[str]) -> subprocess.CompletedProcess:
        """
        Run winetricks with the given verbs in a prefix

        Args:
            wine_version: Wine/Proton build to use
            wine_prefix: Prefix path from the game settings
            args: Winetricks verbs, e.g. ["arial"]

        Raises:
            WinetricksError: winetricks is unavailable or exited non-zero
        """
        winetricks_cmd = self.get_winetricks()
        if not winetricks_cmd:
            raise WinetricksError("Winetricks not found - cannot install packages")

        cmd = [winetricks_cmd, "-q"] + list(args)
        env = self._build_env(wine_version, wine_prefix)

        self.logger.info(f"Running winetricks in {env['WINEPREFIX']}: {' '.join(args)}")

        try:
            result = subprocess.run(cmd, env=env, capture_output=True, text=True)
        except OSError as e:
            raise WinetricksError(f"Could not run winetricks: {e}") from e

        if result.returncode != 0:
            if result.stderr:
                for line in result.stderr.split('\n')[-10:]:
                    if line.strip():
                        self.logger.warning(f"  {line}")
            raise WinetricksError(f"winetricks {' '.join(args)} exited with code {result.returncode}")

        self.logger.info(f"[OK] winetricks installed: {', '.join(args)}")
        return result

    def clear_cache(self):
        """Clear cached winetricks (force re-download on next get)"""
        self.cache_store.clear(self.CACHE_KEY)
