"""Session lifecycle state machine: ready, start, end."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol

from tutor_sessions.domain.errors import (
    CapacityError,
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from tutor_sessions.domain.payments import PaymentReceipt
from tutor_sessions.domain.sessions import (
    ONGOING,
    PAYMENT_NOT_ELIGIBLE,
    PAYMENT_PAID,
    PAYMENT_PENDING,
    SCHEDULED,
    SessionEndResult,
    StudentProfile,
    TutoringSession,
)
from tutor_sessions.services.clock import (
    Clock,
    SystemClock,
    elapsed_minutes,
    parse_timestamp,
)
from tutor_sessions.services.payments import PaymentSettlementService

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for tutoring sessions.

    Every mutating method is a single atomic store operation that only
    applies while the session is still in the expected phase.
    """

    def get_session(self, session_id: str) -> TutoringSession | None:
        """Return a session by id, if present."""

    def add_ready_student(
        self, session_id: str, student_id: str, capacity: int
    ) -> int | None:
        """Add a student to a scheduled session that has room for them.

        Returns the new ready count, or None when the session is no longer
        scheduled, is full, or already lists the student.
        """

    def mark_started(self, session_id: str, started_at: datetime) -> bool:
        """Move a scheduled session to ongoing. Return false if not applied."""

    def mark_completed(
        self,
        session_id: str,
        ended_at: datetime,
        duration_minutes: int,
        payment_status: str,
    ) -> bool:
        """Move an ongoing session to completed. Return false if not applied."""

    def set_payment_status(self, session_id: str, payment_status: str) -> None:
        """Update the payment status of a completed session."""

    def list_pending_payments(self, limit: int) -> list[TutoringSession]:
        """Return completed sessions whose payment is still pending."""


class StudentRepository(Protocol):
    """Persistence interface for student profiles."""

    def get_student(self, student_id: str) -> StudentProfile | None:
        """Return a student profile, if present."""


@dataclass
class SessionLifecycleService:
    """State machine for a tutoring session: scheduled, ongoing, completed."""

    session_repository: SessionRepository
    student_repository: StudentRepository
    payment_service: PaymentSettlementService
    clock: Clock = field(default_factory=SystemClock)
    max_ready_students: int = 6
    early_start_minutes: int = 15

    def ready(self, session_id: str | None, student_id: str) -> int:
        """Register a student as ready and return the ready count."""
        session_id = _require_session_id(session_id)
        student = self.student_repository.get_student(student_id)
        if student is None or not student.subscription_active:
            raise ForbiddenError("Active subscription required")

        session = self._load(session_id)
        self._check_can_register(session, student_id)
        total = self.session_repository.add_ready_student(
            session_id, student_id, self.max_ready_students
        )
        if total is None:
            # Another request changed the session first; report why.
            self._check_can_register(self._load(session_id), student_id)
            raise InvalidStateError("Session is not open for students")

        logger.info(
            "Student marked ready",
            extra={"session_id": session_id, "student_id": student_id},
        )
        return total

    def start(self, session_id: str | None, tutor_id: str) -> datetime:
        """Start a scheduled session and return its start time."""
        session_id = _require_session_id(session_id)
        session = self._load(session_id)
        _check_owner(session, tutor_id)
        if session.status != SCHEDULED:
            raise InvalidStateError("Session cannot be started")
        if not session.ready_students:
            raise InvalidStateError("No students ready")
        scheduled_start = parse_timestamp(session.scheduled_start)
        if scheduled_start is None:
            raise InvalidInputError("scheduled_start must be a valid timestamp")

        now = self.clock.now()
        earliest = scheduled_start - timedelta(minutes=self.early_start_minutes)
        if now < earliest:
            raise InvalidStateError(
                f"Session can only be started {self.early_start_minutes} "
                "minutes before schedule"
            )
        if not self.session_repository.mark_started(session_id, now):
            raise InvalidStateError("Session cannot be started")

        logger.info("Session started", extra={"session_id": session_id})
        return now

    def end(self, session_id: str | None, tutor_id: str) -> SessionEndResult:
        """Complete an ongoing session and pay the tutor when it qualifies."""
        session_id = _require_session_id(session_id)
        session = self._load(session_id)
        _check_owner(session, tutor_id)
        if session.status != ONGOING:
            raise InvalidStateError("Session is not ongoing")
        if session.session_start is None:
            raise InvalidStateError("Session has not started")

        now = self.clock.now()
        duration = elapsed_minutes(session.session_start, now)
        eligible = self.payment_service.is_eligible(duration)
        completed = self.session_repository.mark_completed(
            session_id,
            ended_at=now,
            duration_minutes=duration,
            payment_status=PAYMENT_PENDING if eligible else PAYMENT_NOT_ELIGIBLE,
        )
        if not completed:
            raise InvalidStateError("Session is not ongoing")
        logger.info(
            "Session completed",
            extra={"session_id": session_id, "duration_minutes": duration},
        )

        if not eligible:
            return SessionEndResult(
                session_id=session_id, duration_minutes=duration, paid=False
            )
        receipt = self._settle(session_id, tutor_id, duration)
        return SessionEndResult(
            session_id=session_id,
            duration_minutes=duration,
            paid=receipt is not None,
            amount=receipt.amount if receipt else None,
        )

    def reconcile_pending_payments(self, limit: int = 50) -> list[PaymentReceipt]:
        """Settle completed sessions whose payment never got recorded."""
        receipts: list[PaymentReceipt] = []
        for session in self.session_repository.list_pending_payments(limit):
            if session.session_duration is None:
                logger.warning(
                    "Pending session has no duration", extra={"session_id": session.id}
                )
                continue
            try:
                receipt = self._settle(
                    session.id, session.tutor_id, session.session_duration
                )
            except InternalError:
                continue
            if receipt is not None:
                receipts.append(receipt)
        return receipts

    def _settle(
        self, session_id: str, tutor_id: str, duration: int
    ) -> PaymentReceipt | None:
        try:
            receipt = self.payment_service.settle(session_id, tutor_id, duration)
            self.session_repository.set_payment_status(
                session_id, PAYMENT_PAID if receipt else PAYMENT_NOT_ELIGIBLE
            )
        except Exception as exc:
            logger.exception(
                "Payment settlement failed, session left pending",
                extra={"session_id": session_id, "tutor_id": tutor_id},
            )
            raise InternalError("Payment could not be recorded") from exc
        return receipt

    def _load(self, session_id: str) -> TutoringSession:
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def _check_can_register(self, session: TutoringSession, student_id: str) -> None:
        if session.status != SCHEDULED:
            raise InvalidStateError("Session is not open for students")
        if len(session.ready_students) >= self.max_ready_students:
            raise CapacityError(
                f"Session is full (max {self.max_ready_students} students)"
            )
        if student_id in session.ready_students:
            raise ConflictError("Student already marked as ready")


def _require_session_id(session_id: str | None) -> str:
    """Validate the session id from a request body."""
    if not isinstance(session_id, str) or not session_id.strip():
        raise InvalidInputError("session_id is required")
    return session_id


def _check_owner(session: TutoringSession, tutor_id: str) -> None:
    if session.tutor_id != tutor_id:
        raise ForbiddenError("Not your session")
