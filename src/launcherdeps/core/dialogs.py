"""
Dialog service used for user-facing alerts

The default presenter only logs; GUI frontends register their own
presenter (e.g. an AlertDialog) with set_presenter.
"""

from typing import Callable, Optional

from launcherdeps.utils.logger import get_logger

DIALOG_ERROR = "ERROR"
DIALOG_WARNING = "WARNING"
DIALOG_INFO = "INFO"


class DialogService:
    """Shows modal message boxes through an optional presenter callback"""

    def __init__(self, presenter: Optional[Callable[[str, str, str], None]] = None):
        self.logger = get_logger(__name__)
        self.presenter = presenter

    def set_presenter(self, presenter: Callable[[str, str, str], None]):
        """
        Set the function that actually displays dialogs

        Args:
            presenter: Function called as presenter(title, message, type)
        """
        self.presenter = presenter

    def show(self, title: str, message: str, dialog_type: str = DIALOG_INFO):
        """Show a dialog; returns once the presenter has been handed the dialog"""
        if dialog_type == DIALOG_ERROR:
            self.logger.error(f"{title}: {message}")
        elif dialog_type == DIALOG_WARNING:
            self.logger.warning(f"{title}: {message}")
        else:
            self.logger.info(f"{title}: {message}")

        if self.presenter:
            try:
                self.presenter(title, message, dialog_type)
            except Exception as e:
                self.logger.warning(f"Dialog presenter failed: {e}")

    def show_error(self, title: str, message: str):
        self.show(title, message, DIALOG_ERROR)
