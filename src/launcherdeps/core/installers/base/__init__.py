"""
Base installer classes
"""

from launcherdeps.core.installers.base.base_installer import BaseInstaller

__all__ = ['BaseInstaller']
