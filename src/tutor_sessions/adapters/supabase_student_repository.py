"""Supabase-backed student profile repository."""

from dataclasses import dataclass

from supabase import Client

from tutor_sessions.domain.sessions import StudentProfile
from tutor_sessions.services.sessions import StudentRepository


@dataclass
class SupabaseStudentRepository(StudentRepository):
    """Supabase implementation for student profiles."""

    client: Client

    def get_student(self, student_id: str) -> StudentProfile | None:
        """Return a student profile, if present."""
        response = (
            self.client.table("students")
            .select("id, subscription_active")
            .eq("id", student_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return StudentProfile(
            id=str(row["id"]),
            subscription_active=row.get("subscription_active") is True,
        )
