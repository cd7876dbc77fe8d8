"""Tutor payment settlement for completed sessions."""

import logging
from dataclasses import dataclass
from typing import Protocol

from tutor_sessions.domain.payments import PaymentReceipt

logger = logging.getLogger(__name__)


class PaymentRepository(Protocol):
    """Persistence interface for the tutor payment ledger."""

    def record_session_payment(
        self, session_id: str, tutor_id: str, amount: int
    ) -> PaymentReceipt:
        """Credit the wallet and append the transaction and payment log.

        All three writes commit together. A session that already has a
        transaction is returned as-is with ``already_settled`` set.
        """


@dataclass
class PaymentSettlementService:
    """Decides payment eligibility and records the ledger update."""

    repository: PaymentRepository
    payment_amount: int = 50000
    required_duration_minutes: int = 45

    def is_eligible(self, duration_minutes: int) -> bool:
        """Return true when a session ran long enough to be paid."""
        return duration_minutes >= self.required_duration_minutes

    def settle(
        self, session_id: str, tutor_id: str, duration_minutes: int
    ) -> PaymentReceipt | None:
        """Pay the tutor a fixed amount for a qualifying session."""
        if not self.is_eligible(duration_minutes):
            return None
        receipt = self.repository.record_session_payment(
            session_id=session_id,
            tutor_id=tutor_id,
            amount=self.payment_amount,
        )
        if receipt.already_settled:
            logger.info(
                "Session payment already recorded",
                extra={
                    "session_id": session_id,
                    "transaction_id": receipt.transaction_id,
                },
            )
        else:
            logger.info(
                "Session payment recorded",
                extra={
                    "session_id": session_id,
                    "tutor_id": tutor_id,
                    "amount": receipt.amount,
                },
            )
        return receipt
