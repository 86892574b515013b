"""
Base Installer Class

This module provides the base class for dependency installers.
It contains the logging and callback plumbing shared by installers.
"""

from typing import Optional, Callable

from launcherdeps.utils.logger import get_logger


class BaseInstaller:
    """
    Base class for dependency installers

    Provides common functionality for:
    - Logging and progress callbacks
    - Forwarding status messages to a frontend
    """

    def __init__(self, installer_name: Optional[str] = None):
        """
        Initialize the base installer

        Args:
            installer_name: Name of the installer for logging (optional, uses class name if not provided)
        """
        logger_name = installer_name or self.__class__.__name__
        self.logger = get_logger(logger_name)

        self.progress_callback: Optional[Callable] = None
        self.log_callback: Optional[Callable] = None

        self.logger.debug(f"{logger_name} initialized")

    def set_progress_callback(self, callback: Callable):
        """
        Set a callback function for progress updates

        Args:
            callback: Function to call with progress updates
                     Signature: callback(percent: float, current: int, total: int)
        """
        self.progress_callback = callback

    def set_log_callback(self, callback: Callable):
        """
        Set a callback function for log messages

        Args:
            callback: Function to call with log messages
                     Signature: callback(message: str)
        """
        self.log_callback = callback

    def _log_progress(self, message: str):
        """
        Log a progress message to both logger and callback

        Args:
            message: Progress message to log
        """
        self.logger.info(message)
        if self.log_callback:
            try:
                self.log_callback(message)
            except Exception as e:
                self.logger.error(f"Callback failed: {e}")

    def _send_progress_update(self, percent: float, current: int = 0, total: int = 0):
        """
        Send a progress percentage update to callback

        Args:
            percent: Progress percentage (0-100)
        """
        if self.progress_callback:
            try:
                self.progress_callback(percent, current, total)
            except Exception as e:
                self.logger.error(f"Progress callback failed: {e}")
