"""
Confirmation workflow for the top-up link.

Each request walks its own small state machine:

    RECEIVED -> AUTH_CHECK -> REJECTED
                           -> AUTHORIZED -> TRANSFER_SUCCEEDED -> RESPONDED
                                         -> TRANSFER_FAILED    -> RESPONDED

Nothing is carried between requests. The transfer is always built from the
configuration; the presented secret is the only request input.
"""

import hmac
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .config.settings import BankerConfig
from .data.models import Notification, TransferRequest, TransferResult
from .delivery.base import BaseNotifier
from .logging.config import get_confirmation_logger, log_confirmation_transition

logger = get_confirmation_logger(__name__)

QUEUED_TITLE = "Top-up queued"
FAILED_TITLE = "Top-up failed"


class TransferExecutor(Protocol):
    def create_transfer(self, request: TransferRequest) -> TransferResult: ...


class ConfirmationState(str, Enum):
    """Per-request confirmation states."""
    RECEIVED = "received"
    AUTH_CHECK = "auth_check"
    REJECTED = "rejected"
    AUTHORIZED = "authorized"
    TRANSFER_SUCCEEDED = "transfer_succeeded"
    TRANSFER_FAILED = "transfer_failed"
    RESPONDED = "responded"


@dataclass(frozen=True)
class ConfirmationOutcome:
    """What to answer the caller with."""
    status_code: int
    body: str
    state: ConfirmationState
    transfer_id: Optional[str] = None
    error: Optional[str] = None


class ConfirmationHandler:
    """Authorizes a confirmation request and executes the top-up."""

    def __init__(
        self,
        config: BankerConfig,
        transfer_executor: TransferExecutor,
        notifier: BaseNotifier
    ) -> None:
        self.config = config
        self.transfer_executor = transfer_executor
        self.notifier = notifier
        self.logger = logger

    def is_authorized(self, presented_secret: str) -> bool:
        """Exact match against the configured secret, in constant time."""
        return hmac.compare_digest(
            presented_secret.encode('utf-8'),
            self.config.webhook_secret.encode('utf-8')
        )

    def handle(self, presented_secret: str) -> ConfirmationOutcome:
        """
        Process one confirmation request.

        Args:
            presented_secret: Secret taken from the request path

        Returns:
            ConfirmationOutcome with the HTTP status and plain-text body
        """
        request_id = uuid.uuid4().hex[:12]
        state = ConfirmationState.RECEIVED

        def transition(to_state: ConfirmationState, trigger: str, **context) -> ConfirmationState:
            log_confirmation_transition(
                self.logger,
                request_id=request_id,
                from_state=state.value,
                to_state=to_state.value,
                trigger=trigger,
                context=context or None
            )
            return to_state

        state = transition(ConfirmationState.AUTH_CHECK, "request_received")

        if not self.is_authorized(presented_secret):
            state = transition(ConfirmationState.REJECTED, "secret_mismatch")
            return ConfirmationOutcome(
                status_code=403,
                body="forbidden",
                state=state
            )

        state = transition(ConfirmationState.AUTHORIZED, "secret_match")
        request = TransferRequest.from_config(self.config)

        try:
            result = self.transfer_executor.create_transfer(request)
        except Exception as e:
            state = transition(
                ConfirmationState.TRANSFER_FAILED,
                "transfer_error",
                error=str(e),
                error_type=type(e).__name__
            )
            self._send_outcome(Notification(title=FAILED_TITLE, message=str(e)), request_id)
            state = transition(ConfirmationState.RESPONDED, "error_response")
            return ConfirmationOutcome(
                status_code=500,
                body="error",
                state=state,
                error=str(e)
            )

        state = transition(
            ConfirmationState.TRANSFER_SUCCEEDED,
            "transfer_created",
            transfer_id=result.transfer_id,
            amount=str(request.amount)
        )
        self._send_outcome(
            Notification(
                title=QUEUED_TITLE,
                message=(
                    f"Transfer id {result.transfer_id} submitted for "
                    f"{request.amount} {request.currency}."
                )
            ),
            request_id
        )
        state = transition(ConfirmationState.RESPONDED, "success_response")
        return ConfirmationOutcome(
            status_code=200,
            body="Transfer submitted.",
            state=state,
            transfer_id=result.transfer_id
        )

    def _send_outcome(self, notification: Notification, request_id: str) -> None:
        """Notify the outcome; a notifier failure does not change the response."""
        try:
            self.notifier.notify(notification)
        except Exception as e:
            self.logger.error(
                "Outcome notification failed",
                request_id=request_id,
                title=notification.title,
                error=str(e)
            )
