"""Supabase-backed payment ledger repository."""

from dataclasses import dataclass

from supabase import Client

from tutor_sessions.domain.payments import PaymentReceipt
from tutor_sessions.services.payments import PaymentRepository


@dataclass
class SupabasePaymentRepository(PaymentRepository):
    """Supabase implementation for the tutor payment ledger.

    The wallet credit, transaction and payment log are written by the
    ``settle_session_payment`` database function in one transaction.
    """

    client: Client

    def record_session_payment(
        self, session_id: str, tutor_id: str, amount: int
    ) -> PaymentReceipt:
        """Record a session payment, or return the one already recorded."""
        response = self.client.rpc(
            "settle_session_payment",
            {
                "p_session_id": session_id,
                "p_tutor_id": tutor_id,
                "p_amount": amount,
            },
        ).execute()
        if not response.data:
            raise RuntimeError("Failed to record session payment")
        row = response.data[0]
        return PaymentReceipt(
            transaction_id=str(row["transaction_id"]),
            session_id=session_id,
            tutor_id=tutor_id,
            amount=int(row["amount"]),
            already_settled=bool(row.get("already_settled")),
        )
