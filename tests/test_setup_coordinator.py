"""
Tests for the setup coordinator: gating, the status event and the parallel
installer / font branches.
"""

import threading
from unittest import mock

import pytest

from launcherdeps.core.installers.utils.winetricks_manager import WinetricksError
from launcherdeps.core.notifications import FrontendNotifier, GAME_STATUS_UPDATE
from launcherdeps.core.runtime.game import Runner
from launcherdeps.core.setup_coordinator import SetupCoordinator
from tests.conftest import FakeGame


@pytest.fixture
def library(game):
    library = mock.MagicMock()
    library.get.side_effect = lambda app_name: game if app_name == game.app_name else None
    return library


@pytest.fixture
def winetricks():
    return mock.MagicMock()


@pytest.fixture
def events():
    return []


@pytest.fixture
def notifier(events):
    notifier = FrontendNotifier()
    notifier.subscribe(lambda channel, payload: events.append((channel, payload)))
    return notifier


@pytest.fixture
def coordinator(library, installer, winetricks, notifier):
    return SetupCoordinator(library, installer, winetricks, notifier)


class TestNoOps:
    def _assert_untouched(self, game, winetricks, events, presenter, get):
        assert events == []
        assert game.commands == []
        winetricks.run_with_args.assert_not_called()
        presenter.assert_not_called()
        get.assert_not_called()

    def test_unknown_game(self, coordinator, game, winetricks, events, presenter):
        with mock.patch("launcherdeps.core.installers.utils.cache_store.requests.get") as get:
            coordinator.maybe_setup_dependency("not_installed")
        self._assert_untouched(game, winetricks, events, presenter, get)

    def test_game_without_launcher(self, coordinator, game, winetricks, events, presenter):
        game.info.install.executable = "Game.exe"
        with mock.patch("launcherdeps.core.installers.utils.cache_store.requests.get") as get:
            coordinator.maybe_setup_dependency(game.app_name)
        self._assert_untouched(game, winetricks, events, presenter, get)

    def test_launcher_already_installed(self, coordinator, game, winetricks, events, presenter):
        game.install_launcher()
        with mock.patch("launcherdeps.core.installers.utils.cache_store.requests.get") as get:
            coordinator.maybe_setup_dependency(game.app_name)
        self._assert_untouched(game, winetricks, events, presenter, get)

    def test_lookup_error_is_logged_not_raised(self, coordinator, library, events):
        library.get.side_effect = OSError("permission denied")
        coordinator.maybe_setup_dependency("ubi_game")
        assert events == []


class TestSetup:
    def test_successful_install(self, coordinator, game, winetricks, events, presenter, fresh_installer):
        game.on_run = game.install_launcher

        coordinator.maybe_setup_dependency(game.app_name)

        assert events == [(GAME_STATUS_UPDATE, {
            "appName": "ubi_game",
            "runner": "legendary",
            "status": "installing-dependency"
        })]
        presenter.assert_not_called()
        settings = game.get_settings()
        winetricks.run_with_args.assert_called_once_with(settings.wine_version, settings.wine_prefix, ["arial"])
        assert game.launcher_path().exists()

    def test_failed_install_shows_error(self, coordinator, game, winetricks, events, presenter, fresh_installer):
        coordinator.maybe_setup_dependency(game.app_name)

        assert len(events) == 1
        presenter.assert_called_once()
        assert "Ubisoft Connect" in presenter.call_args.args[0]
        winetricks.run_with_args.assert_called_once()

    def test_font_failure_propagates_after_install(self, coordinator, game, winetricks, fresh_installer):
        game.on_run = game.install_launcher
        winetricks.run_with_args.side_effect = WinetricksError("winetricks arial exited with code 1")

        with pytest.raises(WinetricksError):
            coordinator.maybe_setup_dependency(game.app_name)

        assert game.launcher_path().exists()

    def test_installer_crash_does_not_cancel_fonts(self, coordinator, installer, game, winetricks, fresh_installer):
        with mock.patch.object(installer, "install", side_effect=RuntimeError("crash")):
            coordinator.maybe_setup_dependency(game.app_name)

        winetricks.run_with_args.assert_called_once()

    def test_branches_run_concurrently(self, coordinator, game, winetricks, fresh_installer):
        barrier = threading.Barrier(2, timeout=5)
        met = []

        def installer_run(command_parts):
            barrier.wait()
            met.append("installer")
            game.install_launcher()

        def fonts(*args):
            barrier.wait()
            met.append("fonts")

        game.on_run = installer_run
        winetricks.run_with_args.side_effect = fonts

        coordinator.maybe_setup_dependency(game.app_name)

        assert sorted(met) == ["fonts", "installer"]

    def test_custom_font_packages(self, library, installer, winetricks, notifier, game, fresh_installer):
        coordinator = SetupCoordinator(library, installer, winetricks, notifier, font_packages=["arial", "corefonts"])
        game.on_run = game.install_launcher

        coordinator.maybe_setup_dependency(game.app_name)

        assert winetricks.run_with_args.call_args.args[2] == ["arial", "corefonts"]

    def test_each_call_is_independent(self, coordinator, game, winetricks, events, fresh_installer):
        game.on_run = game.install_launcher

        coordinator.maybe_setup_dependency(game.app_name)
        coordinator.maybe_setup_dependency(game.app_name)

        # The second call finds the launcher installed and does nothing
        assert len(events) == 1
        assert winetricks.run_with_args.call_count == 1

    def test_other_runner_reported(self, installer, winetricks, notifier, events, tmp_path, fresh_installer):
        prefix = tmp_path / "gog-prefix"
        prefix.mkdir()
        gog_game = FakeGame(prefix, app_name="gog_ubi", runner=Runner.GOG)
        gog_game.on_run = gog_game.install_launcher
        library = mock.MagicMock()
        library.get.return_value = gog_game

        SetupCoordinator(library, installer, winetricks, notifier).maybe_setup_dependency("gog_ubi")

        assert events[0][1]["runner"] == "gog"
