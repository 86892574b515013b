"""
Installer modules for launcher dependencies

This package contains the base installer class, the download cache and the
launcher dependency installer.
"""

from launcherdeps.core.installers.base.base_installer import BaseInstaller
from launcherdeps.core.installers.dependency import LauncherDependency, UBISOFT_CONNECT
from launcherdeps.core.installers.launcher_installer import LauncherDependencyInstaller

__all__ = ['BaseInstaller', 'LauncherDependency', 'UBISOFT_CONNECT', 'LauncherDependencyInstaller']
