"""
Shared fixtures: isolated home directories, fake games and collaborators.
No test touches the network or runs Wine.
"""

import os
import subprocess
import sys
import time
from pathlib import Path
from unittest import mock

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from launcherdeps.core.dialogs import DialogService  # noqa: E402
from launcherdeps.core.installers.dependency import UBISOFT_CONNECT  # noqa: E402
from launcherdeps.core.installers.launcher_installer import LauncherDependencyInstaller  # noqa: E402
from launcherdeps.core.installers.utils.cache_store import CacheStore  # noqa: E402
from launcherdeps.core.runtime.game import GameInfo, GameSettings, InstallInfo, Runner, WineVersion  # noqa: E402


class FakeGame:
    """Game stand-in whose prefix is a plain directory"""

    def __init__(self, prefix: Path, executable: str = "UplayLaunch.exe", app_name: str = "ubi_game",
                 title: str = "Ubi Game", runner: Runner = Runner.LEGENDARY, wine_version: WineVersion = None):
        self.info = GameInfo(app_name, title, runner, InstallInfo(executable=executable))
        self.settings = GameSettings(
            wine_version or WineVersion(bin="/opt/wine/bin/wine", name="Wine-GE", type="wine"),
            str(prefix)
        )
        self.commands = []
        self.on_run = None

    @property
    def app_name(self):
        return self.info.app_name

    @property
    def runner(self):
        return self.info.runner

    def get_game_info(self):
        return self.info

    def get_settings(self):
        return self.settings

    def run_wine_command(self, command_parts, env=None, settings=None):
        self.commands.append(list(command_parts))
        if self.on_run:
            self.on_run(command_parts)
        return subprocess.CompletedProcess(command_parts, 0, "", "")

    def get_wine_path(self, windows_path, settings=None):
        relative = windows_path.replace("\\", "/").split(":/", 1)[1]
        return str(Path(self.settings.wine_prefix) / "drive_c" / relative)

    def launcher_path(self) -> Path:
        return Path(self.get_wine_path(UBISOFT_CONNECT.guest_executable_path))

    def install_launcher(self, *args):
        path = self.launcher_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"MZ")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("LAUNCHERDEPS_HOME", str(home / "LauncherDeps"))
    monkeypatch.setenv("LAUNCHERDEPS_CONFIG", str(home / ".config" / "launcherdeps" / "settings.json"))
    return home


@pytest.fixture
def cache_store(tmp_path):
    return CacheStore(tmp_path / "cache")


@pytest.fixture
def fresh_installer(cache_store):
    """A freshly cached installer so no download is attempted"""
    path = cache_store.path_for(UBISOFT_CONNECT.key)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"installer")
    now = time.time()
    os.utime(path, (now, now))
    return path


@pytest.fixture
def presenter():
    return mock.MagicMock()


@pytest.fixture
def dialogs(presenter):
    return DialogService(presenter)


@pytest.fixture
def installer(cache_store, dialogs):
    return LauncherDependencyInstaller(cache_store, dialogs)


@pytest.fixture
def game(tmp_path):
    prefix = tmp_path / "prefixes" / "Ubi Game"
    prefix.mkdir(parents=True)
    return FakeGame(prefix)


def make_response(data: bytes, status_error: Exception = None, chunk: int = 4):
    """Build a mocked streaming requests response"""
    response = mock.MagicMock()
    response.headers = {"content-length": str(len(data))}
    response.iter_content.return_value = [data[i:i + chunk] for i in range(0, len(data), chunk)]
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


@pytest.fixture
def response_factory():
    return make_response
