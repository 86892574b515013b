"""
Launcher dependency descriptors
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LauncherDependency:
    """A launcher some games need installed in their prefix before they run"""
    key: str
    display_name: str
    installer_url: str
    trigger_executable: str
    guest_executable_path: str
    silent_args: Tuple[str, ...]
    error_title_key: str
    error_message_key: str
    error_message_default: str


UBISOFT_CONNECT = LauncherDependency(
    key="UbisoftConnectInstaller.exe",
    display_name="Ubisoft Connect",
    installer_url="https://ubistatic3-a.akamaihd.net/orbit/launcher_installer/UbisoftConnectInstaller.exe",
    trigger_executable="UplayLaunch.exe",
    guest_executable_path="C:/Program Files (x86)/Ubisoft/Ubisoft Game Launcher/UbisoftConnect.exe",
    silent_args=("/S",),
    error_title_key="box.error.ubisoft-connect.title",
    error_message_key="box.error.ubisoft-connect.message",
    error_message_default=(
        "Installation of Ubisoft Connect in the game prefix failed. Check our wiki page at "
        "https://github.com/Heroic-Games-Launcher/HeroicGamesLauncher/wiki/How-to-install-Ubisoft-Connect-on-Linux-and-Mac "
        "to install it manually."
    ),
)
