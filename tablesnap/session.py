"""Per-action outcome slots.

Each action surface (table extraction, image editing) owns one `ActionSlot`.
Starting an action tags it with a fresh request id; a result is only applied
if its tag still matches the live outcome, so late answers from an abandoned
request are dropped instead of overwriting newer state.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Iterator

from tablesnap.errors import ActionInProgress, user_message
from tablesnap.logging_config import logger
from tablesnap.models import Failure, Pending, RequestOutcome, Success


class ActionSlot:
    def __init__(self, name: str) -> None:
        self.name = name
        self.outcome: RequestOutcome | None = None

    @property
    def is_pending(self) -> bool:
        return isinstance(self.outcome, Pending)

    def start(self) -> str:
        if self.is_pending:
            raise ActionInProgress(f"'{self.name}' already has a request in flight.")
        request_id = uuid.uuid4().hex
        self.outcome = Pending(request_id=request_id)
        logger.info("Action started action=%s request_id=%s", self.name, request_id)
        return request_id

    def _is_current(self, request_id: str) -> bool:
        current = self.outcome
        if isinstance(current, Pending) and current.request_id == request_id:
            return True
        logger.info(
            "Discarding stale result action=%s request_id=%s", self.name, request_id
        )
        return False

    def resolve(self, request_id: str, payload: Any) -> bool:
        if not self._is_current(request_id):
            return False
        self.outcome = Success(request_id=request_id, payload=payload)
        return True

    def fail(self, request_id: str, exc: BaseException) -> bool:
        if not self._is_current(request_id):
            return False
        kind = getattr(exc, "error_code", "service_error")
        self.outcome = Failure(request_id=request_id, reason=user_message(exc), kind=kind)
        return True

    def reset(self) -> None:
        self.outcome = None

    @contextmanager
    def running(self) -> Iterator[str]:
        """Start a request and yield its id.

        If the block exits (even via BaseException) without resolving or
        failing the request, the slot is cleared instead of staying pending.
        """
        request_id = self.start()
        try:
            yield request_id
        finally:
            current = self.outcome
            if isinstance(current, Pending) and current.request_id == request_id:
                logger.info(
                    "Action abandoned action=%s request_id=%s", self.name, request_id
                )
                self.reset()
