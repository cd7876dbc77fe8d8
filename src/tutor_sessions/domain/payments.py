"""Domain models for tutor payments."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Wallet:
    """Tutor wallet balance."""

    tutor_id: str
    balance: int
    created_at: datetime | None


@dataclass(frozen=True)
class PaymentReceipt:
    """Result of recording a session payment in the ledger."""

    transaction_id: str
    session_id: str
    tutor_id: str
    amount: int
    already_settled: bool = False
