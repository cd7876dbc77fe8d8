"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from tutor_sessions.domain.sessions import (
    COMPLETED,
    ONGOING,
    PAYMENT_PENDING,
    SCHEDULED,
    TutoringSession,
)
from tutor_sessions.services.clock import parse_timestamp
from tutor_sessions.services.sessions import SessionRepository

_COLUMNS = (
    "id, tutor_id, status, scheduled_start, ready_students, session_start, "
    "session_end, session_duration, payment_status"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for tutoring sessions.

    Phase transitions are conditional updates filtered on the current
    status, so only one of several concurrent callers can apply them.
    Ready registration goes through the ``mark_student_ready`` function,
    which appends to the array in a single statement.
    """

    client: Client

    def get_session(self, session_id: str) -> TutoringSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_session(response.data[0])

    def add_ready_student(
        self, session_id: str, student_id: str, capacity: int
    ) -> int | None:
        """Append a student to the ready set if the session still allows it."""
        response = self.client.rpc(
            "mark_student_ready",
            {
                "p_session_id": session_id,
                "p_student_id": student_id,
                "p_capacity": capacity,
            },
        ).execute()
        if not response.data:
            return None
        return int(response.data[0]["total_ready_students"])

    def mark_started(self, session_id: str, started_at: datetime) -> bool:
        """Set the session ongoing if it is still scheduled."""
        response = (
            self.client.table("sessions")
            .update({"status": ONGOING, "session_start": started_at.isoformat()})
            .eq("id", session_id)
            .eq("status", SCHEDULED)
            .execute()
        )
        return bool(response.data)

    def mark_completed(
        self,
        session_id: str,
        ended_at: datetime,
        duration_minutes: int,
        payment_status: str,
    ) -> bool:
        """Set the session completed if it is still ongoing."""
        response = (
            self.client.table("sessions")
            .update(
                {
                    "status": COMPLETED,
                    "session_end": ended_at.isoformat(),
                    "session_duration": duration_minutes,
                    "payment_status": payment_status,
                }
            )
            .eq("id", session_id)
            .eq("status", ONGOING)
            .execute()
        )
        return bool(response.data)

    def set_payment_status(self, session_id: str, payment_status: str) -> None:
        """Update the payment status of a completed session."""
        self.client.table("sessions").update({"payment_status": payment_status}).eq(
            "id", session_id
        ).eq("status", COMPLETED).execute()

    def list_pending_payments(self, limit: int) -> list[TutoringSession]:
        """Return completed sessions still waiting for payment."""
        response = (
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("status", COMPLETED)
            .eq("payment_status", PAYMENT_PENDING)
            .order("session_end")
            .limit(limit)
            .execute()
        )
        return [_to_session(row) for row in response.data or []]


def _to_session(row: dict[str, object]) -> TutoringSession:
    duration = row.get("session_duration")
    return TutoringSession(
        id=str(row["id"]),
        tutor_id=str(row["tutor_id"]),
        status=str(row["status"]),
        scheduled_start=row.get("scheduled_start"),
        ready_students=frozenset(row.get("ready_students") or []),
        session_start=parse_timestamp(row.get("session_start")),
        session_end=parse_timestamp(row.get("session_end")),
        session_duration=int(duration) if duration is not None else None,
        payment_status=row.get("payment_status"),
    )
