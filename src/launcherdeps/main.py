#!/usr/bin/env python3
"""
Main application module for LauncherDeps
"""
import argparse
import logging
import sys
from typing import List, Optional

from launcherdeps.core.core import Core
from launcherdeps.utils.logger import get_logger, setup_comprehensive_logging


class LauncherDepsApp:
    """Main LauncherDeps application class"""

    def __init__(self, core: Optional[Core] = None):
        self.logger = get_logger(__name__)
        self.core = core or Core()

    def run(self, args: argparse.Namespace) -> int:
        """Run the application with given arguments"""
        try:
            if args.command == "setup":
                return self._setup(args.app_name)
            elif args.command == "check":
                return self._check(args.app_name)
            elif args.command == "list-games":
                return self._list_games()
            elif args.command == "cache-installer":
                return self._cache_installer(args.force, args.progress)
            elif args.command == "cache-status":
                return self._cache_status()
            elif args.command == "clear-cache":
                return self._clear_cache()
            elif args.command == "version":
                return self._show_version()
            else:
                self.logger.error(f"Unknown command: {args.command}")
                return 1

        except Exception as e:
            self.logger.error(f"Application error: {e}")
            return 1

    def _setup(self, app_name: str) -> int:
        self.logger.info(f"Checking launcher setup for {app_name}...")
        self.core.setup_game(app_name)
        return 0

    def _check(self, app_name: str) -> int:
        installed = self.core.check_game(app_name)
        name = self.core.launcher_installer.dependency.display_name

        if installed is None:
            print(f"Game not found: {app_name}")
            return 1
        if installed:
            print(f"[OK] {name} is installed for {app_name}")
            return 0
        print(f"[MISSING] {name} is not installed for {app_name}")
        return 1

    def _list_games(self) -> int:
        games = self.core.get_games_needing_launcher()
        if not games:
            print("No installed games need a launcher.")
            return 0

        print("Games needing a launcher:")
        print("----------------------------------------")
        for i, game in enumerate(games, 1):
            dlc = " (DLC)" if game.install.is_dlc else ""
            print(f" {i}. {game.title}{dlc} (App: {game.app_name})")
        return 0

    def _cache_installer(self, force: bool, show_progress: bool = False) -> int:
        callback = self._print_progress if show_progress else None
        result = self.core.cache_installer(force=force, progress_callback=callback)
        if show_progress and result.downloaded:
            print()
        if result.success:
            state = "downloaded" if result.downloaded else "already fresh"
            print(f"[OK] Installer {state}: {result.path}")
            return 0
        print(f"[FAILED] Could not cache installer: {result.error}")
        return 1

    @staticmethod
    def _print_progress(percent: float, current: int, total: int):
        print(f"\rDownloading: {percent:5.1f}% ({current}/{total} bytes)", end="", flush=True)

    def _cache_status(self) -> int:
        status = self.core.get_cache_status()
        print(f"Cache directory: {status['cache_dir']} (max age {status['max_age_days']} days)")
        if not status["entries"]:
            print("  (empty)")
        for name, entry in status["entries"].items():
            freshness = "fresh" if entry["fresh"] else "stale"
            print(f"  {name}: {entry['size_mb']} MB, {entry['age_days']} days old, {freshness}")
        return 0

    def _clear_cache(self) -> int:
        removed = self.core.clear_cache()
        print(f"[OK] Removed {removed} cached file(s)")
        return 0

    def _show_version(self) -> int:
        version, date = self.core.get_version_info()
        print(f"LauncherDeps v{version} ({date})")
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        description="LauncherDeps - install game launchers into Heroic prefixes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s setup Ubisoft_Game_App        # Install Ubisoft Connect if the game needs it
  %(prog)s check Ubisoft_Game_App        # Check whether Ubisoft Connect is installed
  %(prog)s list-games                    # List games that launch through a launcher
  %(prog)s cache-installer --force       # Re-download the launcher installer
  %(prog)s cache-installer --progress    # Download the installer and show progress
        """
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    setup_parser = subparsers.add_parser("setup", help="Install the launcher for a game if needed")
    setup_parser.add_argument("app_name", help="Heroic app name of the game")

    check_parser = subparsers.add_parser("check", help="Check whether the launcher is installed for a game")
    check_parser.add_argument("app_name", help="Heroic app name of the game")

    subparsers.add_parser("list-games", help="List games that need a launcher")

    cache_parser = subparsers.add_parser("cache-installer", help="Download the launcher installer into the cache")
    cache_parser.add_argument("--force", action="store_true", help="Download even if the cached copy is fresh")
    cache_parser.add_argument("--progress", action="store_true", help="Print download progress")

    subparsers.add_parser("cache-status", help="Show cached files")
    subparsers.add_parser("clear-cache", help="Remove cached files")
    subparsers.add_parser("version", help="Show version information")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_comprehensive_logging(logging.DEBUG if args.verbose else logging.INFO)

    app = LauncherDepsApp()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
