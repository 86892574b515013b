"""
Tests for frontend notifications, dialogs and translations.
"""

import json
from unittest import mock

from launcherdeps.core.dialogs import DialogService, DIALOG_ERROR
from launcherdeps.core.notifications import (
    FrontendNotifier,
    GAME_STATUS_UPDATE,
    STATUS_INSTALLING_DEPENDENCY,
    StatusEvent,
)
from launcherdeps.utils.i18n import Translator


class TestFrontendNotifier:
    def test_status_event_payload(self):
        received = []
        notifier = FrontendNotifier()
        notifier.subscribe(lambda channel, payload: received.append((channel, payload)))

        notifier.send_status(StatusEvent("game", "legendary", STATUS_INSTALLING_DEPENDENCY))

        assert received == [(GAME_STATUS_UPDATE, {
            "appName": "game", "runner": "legendary", "status": "installing-dependency"
        })]

    def test_failing_subscriber_does_not_block_others(self):
        received = []
        notifier = FrontendNotifier()
        notifier.subscribe(mock.MagicMock(side_effect=RuntimeError("window closed")))
        notifier.subscribe(lambda channel, payload: received.append(channel))

        notifier.send("anything", {})

        assert received == ["anything"]

    def test_no_subscribers(self):
        FrontendNotifier().send_status(StatusEvent("game", "legendary", STATUS_INSTALLING_DEPENDENCY))

    def test_unsubscribe(self):
        callback = mock.MagicMock()
        notifier = FrontendNotifier()
        notifier.subscribe(callback)
        notifier.unsubscribe(callback)

        notifier.send("x", {})

        callback.assert_not_called()


class TestDialogService:
    def test_presenter_receives_error(self):
        presenter = mock.MagicMock()
        DialogService(presenter).show_error("Title", "Message")
        presenter.assert_called_once_with("Title", "Message", DIALOG_ERROR)

    def test_presenter_failure_is_contained(self):
        DialogService(mock.MagicMock(side_effect=RuntimeError("no display"))).show_error("T", "M")

    def test_without_presenter(self):
        DialogService().show("T", "M")


class TestTranslator:
    def test_default_when_missing(self, tmp_path):
        translator = Translator("en", locales_dir=tmp_path)
        assert translator.t("box.error.x", "Fallback") == "Fallback"
        assert translator.t("box.error.x") == "box.error.x"

    def test_flat_and_nested_catalogs(self, tmp_path):
        (tmp_path / "fr.json").write_text(json.dumps({
            "box.flat": "plat",
            "box": {"nested": "imbriqué"}
        }), encoding="utf-8")

        translator = Translator("fr", locales_dir=tmp_path)

        assert translator.t("box.flat", "x") == "plat"
        assert translator.t("box.nested", "x") == "imbriqué"

    def test_corrupt_catalog(self, tmp_path):
        (tmp_path / "es.json").write_text("[1, 2")
        assert Translator("es", locales_dir=tmp_path).t("k", "d") == "d"

    def test_builtin_english_catalog(self, tmp_path):
        translator = Translator("en", locales_dir=tmp_path)
        assert translator.t("box.error.ubisoft-connect.title") == "Ubisoft Connect"
        assert "wiki" in translator.t("box.error.ubisoft-connect.message")

    def test_user_catalog_overrides_builtin(self, tmp_path):
        (tmp_path / "en.json").write_text(json.dumps({
            "box": {"error": {"ubisoft-connect": {"title": "Ubisoft Connect (custom)"}}}
        }), encoding="utf-8")

        translator = Translator("en", locales_dir=tmp_path)

        assert translator.t("box.error.ubisoft-connect.title") == "Ubisoft Connect (custom)"
        assert "wiki" in translator.t("box.error.ubisoft-connect.message")

    def test_other_language_falls_back_to_english(self, tmp_path):
        translator = Translator("pl", locales_dir=tmp_path)
        assert translator.t("box.error.ubisoft-connect.title") == "Ubisoft Connect"
