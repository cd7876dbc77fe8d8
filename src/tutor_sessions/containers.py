"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from tutor_sessions.adapters.supabase_identity_verifier import (
    SupabaseIdentityVerifier,
)
from tutor_sessions.adapters.supabase_payment_repository import (
    SupabasePaymentRepository,
)
from tutor_sessions.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from tutor_sessions.adapters.supabase_student_repository import (
    SupabaseStudentRepository,
)
from tutor_sessions.config import Settings
from tutor_sessions.services.identity import IdentityVerifier
from tutor_sessions.services.payments import PaymentSettlementService
from tutor_sessions.services.sessions import SessionLifecycleService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_verifier: IdentityVerifier
    session_service: SessionLifecycleService
    payment_service: PaymentSettlementService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    payment_service = PaymentSettlementService(
        repository=SupabasePaymentRepository(supabase_client),
        payment_amount=resolved_settings.payment_amount,
        required_duration_minutes=resolved_settings.required_duration_minutes,
    )
    session_service = SessionLifecycleService(
        session_repository=SupabaseSessionRepository(supabase_client),
        student_repository=SupabaseStudentRepository(supabase_client),
        payment_service=payment_service,
        max_ready_students=resolved_settings.max_ready_students,
        early_start_minutes=resolved_settings.early_start_minutes,
    )
    return AppContainer(
        settings=resolved_settings,
        identity_verifier=SupabaseIdentityVerifier(supabase_client),
        session_service=session_service,
        payment_service=payment_service,
    )
