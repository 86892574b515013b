"""
Frontend notifications

Status updates are fire-and-forget: subscribers are called in order and
a failing subscriber never affects the sender.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from launcherdeps.utils.logger import get_logger

GAME_STATUS_UPDATE = "gameStatusUpdate"
STATUS_INSTALLING_DEPENDENCY = "installing-dependency"


@dataclass(frozen=True)
class StatusEvent:
    """Game status change published to the frontend"""
    app_name: str
    runner: str
    status: str

    def to_payload(self) -> Dict[str, Any]:
        """Wire form of the event, keyed the way the frontend reads it"""
        return {"appName": self.app_name, "runner": self.runner, "status": self.status}


class FrontendNotifier:
    """Delivers messages to every subscribed frontend callback"""

    def __init__(self):
        self.logger = get_logger(__name__)
        self._subscribers: List[Callable[[str, Dict[str, Any]], None]] = []

    def subscribe(self, callback: Callable[[str, Dict[str, Any]], None]):
        """
        Register a frontend callback

        Args:
            callback: Function called as callback(channel, payload)
        """
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[str, Dict[str, Any]], None]):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def send(self, channel: str, payload: Dict[str, Any]):
        """Send a message to all subscribers without waiting for acknowledgment"""
        self.logger.debug(f"Frontend message {channel}: {payload}")
        for callback in list(self._subscribers):
            try:
                callback(channel, payload)
            except Exception as e:
                self.logger.warning(f"Frontend subscriber failed on {channel}: {e}")

    def send_status(self, event: StatusEvent):
        self.send(GAME_STATUS_UPDATE, event.to_payload())
