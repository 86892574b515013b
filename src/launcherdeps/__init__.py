"""
LauncherDeps - Launcher dependency helper for Heroic game prefixes
"""

__version__ = "1.0.0"
__version_date__ = "2026-10-17"
