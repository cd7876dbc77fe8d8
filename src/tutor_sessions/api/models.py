"""Request and response models for the sessions API."""

from pydantic import BaseModel


class SessionActionRequest(BaseModel):
    """Body shared by the ready, start and end endpoints."""

    session_id: str | None = None


class ReadyResponse(BaseModel):
    message: str
    total_ready_students: int


class MessageResponse(BaseModel):
    message: str


class EndSessionResponse(BaseModel):
    message: str
    duration_minutes: int
    paid: bool
    amount: int | None = None


class MeResponse(BaseModel):
    uid: str
    email: str | None


class ReceiptResponse(BaseModel):
    transaction_id: str
    session_id: str
    tutor_id: str
    amount: int
    already_settled: bool


class ReconcileResponse(BaseModel):
    settled: list[ReceiptResponse]
