"""
Game runtime abstraction: game metadata, prefix settings and Wine execution
"""

from launcherdeps.core.runtime.game import (
    Game,
    GameInfo,
    GameSettings,
    InstallInfo,
    Runner,
    WineCommandError,
    WineVersion,
)
from launcherdeps.core.runtime.library import GameLibrary

__all__ = [
    'Game', 'GameInfo', 'GameSettings', 'InstallInfo', 'Runner',
    'WineCommandError', 'WineVersion', 'GameLibrary',
]
