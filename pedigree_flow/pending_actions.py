"""
Pending-Action Store: one outstanding yes/no offer per conversation.
"""

import logging
import time
import unicodedata
from dataclasses import dataclass
from typing import Callable, Optional

from . import config
from . import keywords as kw
from .models import PendingAction

logger = logging.getLogger(__name__)


@dataclass
class PendingResult:
    confirmed: bool
    action: Optional[PendingAction] = None


def _clean(query: str) -> str:
    return unicodedata.normalize("NFKC", query or "").strip()


def is_confirmation(query: str) -> bool:
    cleaned = _clean(query)
    if cleaned.lower() in kw.CONFIRM_EXACT:
        return True
    return any(word in cleaned for word in kw.CONFIRM_THAI)


def is_rejection(query: str) -> bool:
    cleaned = _clean(query)
    if cleaned.lower() in kw.REJECT_EXACT:
        return True
    return any(word in cleaned for word in kw.REJECT_THAI)


class PendingActionStore:
    """Single slot holding an offered action; the next yes/no reply consumes it."""

    def __init__(self, ttl_seconds: float = config.PENDING_ACTION_TTL_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._action: Optional[PendingAction] = None
        self._set_at = 0.0

    def set_pending_action(self, action: PendingAction) -> None:
        self._action = action
        self._set_at = self.clock()
        logger.info(f"Pending action set: {action.type} -> {action.value}")

    def has_pending_action(self) -> bool:
        if self._action is None:
            return False
        if self.clock() - self._set_at > self.ttl_seconds:
            logger.info("Pending action expired")
            self._action = None
            return False
        return True

    def get_pending_action(self) -> Optional[PendingAction]:
        return self._action if self.has_pending_action() else None

    def clear(self) -> None:
        self._action = None

    def process_pending_response(self, query: str) -> Optional[PendingResult]:
        """
        Resolve the armed offer against a reply.

        Returns None (slot untouched) when the reply is not a yes/no answer.
        Rejection is checked first so Thai negations such as "ไม่ได้" are not
        read as the confirmation "ได้".
        """
        if not self.has_pending_action():
            return None
        if is_rejection(query):
            logger.info("Pending action rejected")
            self._action = None
            return PendingResult(confirmed=False)
        if is_confirmation(query):
            action = self._action
            self._action = None
            logger.info(f"Pending action confirmed: {action.value}")
            return PendingResult(confirmed=True, action=action)
        return None
