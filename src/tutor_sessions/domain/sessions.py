"""Domain models for tutoring sessions."""

from dataclasses import dataclass, field
from datetime import datetime

SCHEDULED = "scheduled"
ONGOING = "ongoing"
COMPLETED = "completed"

PAYMENT_NOT_ELIGIBLE = "not_eligible"
PAYMENT_PENDING = "pending"
PAYMENT_PAID = "paid"


@dataclass(frozen=True)
class TutoringSession:
    """Represents a persisted tutoring session."""

    id: str
    tutor_id: str
    status: str
    scheduled_start: datetime | str | None
    ready_students: frozenset[str] = field(default_factory=frozenset)
    session_start: datetime | None = None
    session_end: datetime | None = None
    session_duration: int | None = None
    payment_status: str | None = None


@dataclass(frozen=True)
class StudentProfile:
    """Student profile fields the session rules depend on."""

    id: str
    subscription_active: bool


@dataclass(frozen=True)
class SessionEndResult:
    """Outcome of ending a session."""

    session_id: str
    duration_minutes: int
    paid: bool
    amount: int | None = None
