"""
Installer utility modules

This package contains utility classes used by dependency installers.
"""

from launcherdeps.core.installers.utils.cache_store import CacheStore, FetchResult, is_fresh_timestamp
from launcherdeps.core.installers.utils.winetricks_manager import WinetricksError, WinetricksManager

__all__ = ['CacheStore', 'FetchResult', 'is_fresh_timestamp', 'WinetricksError', 'WinetricksManager']
