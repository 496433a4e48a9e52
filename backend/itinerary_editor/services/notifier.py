# backend/itinerary_editor/services/notifier.py

from typing import List, Optional

from itinerary_editor.core.config_loader import settings
from itinerary_editor.core.errors import BackendError
from itinerary_editor.core.logger import logger
from itinerary_editor.models.session_models import Notification


# -------------------------------------------------------
# NOTIFICATION SURFACE (toasts / alerts)
# -------------------------------------------------------
class LogNotifier:
    def error(self, message: str) -> None:
        logger.warning(f"[notify:error] {message}")

    def success(self, message: str) -> None:
        logger.info(f"[notify:success] {message}")


class BufferedNotifier(LogNotifier):
    """Keeps messages until the UI layer drains them into a response."""

    def __init__(self):
        self.pending: List[Notification] = []

    def error(self, message: str) -> None:
        super().error(message)
        self.pending.append(Notification(level="error", message=message))

    def success(self, message: str) -> None:
        super().success(message)
        self.pending.append(Notification(level="success", message=message))

    def drain(self) -> List[Notification]:
        out, self.pending = self.pending, []
        return out


# -------------------------------------------------------
# NAVIGATION (only ever used to send the user to login)
# -------------------------------------------------------
class LogNavigator:
    def to_login(self) -> None:
        logger.warning(f"Unauthenticated, redirecting to {settings.LOGIN_PATH}")


class BufferedNavigator(LogNavigator):
    def __init__(self):
        self.redirect: Optional[str] = None

    def to_login(self) -> None:
        super().to_login()
        self.redirect = settings.LOGIN_PATH

    def take_redirect(self) -> Optional[str]:
        target, self.redirect = self.redirect, None
        return target


def report_failure(error: BackendError, notifier, navigator, description: str) -> None:
    """401 -> login, anything else -> generic toast. Never touches schedule state."""
    if error.unauthorized:
        navigator.to_login()
        return
    logger.error(f"{description} (status {error.status}): {error.body}")
    notifier.error(f"{description}. Please try again.")
