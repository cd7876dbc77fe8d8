"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import (
    APIRouter,
    Depends,
    Header,
    HTTPException,
    Query,
    Request,
    status,
)

from tutor_sessions.api.models import ReceiptResponse, ReconcileResponse

if TYPE_CHECKING:
    from tutor_sessions.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/payments/reconcile", dependencies=[Depends(require_admin)])
def reconcile_payments(
    request: Request, limit: int = Query(50, ge=1, le=500)
) -> ReconcileResponse:
    """Settle completed sessions whose payment is still pending."""
    container: AppContainer = request.app.state.container
    receipts = container.session_service.reconcile_pending_payments(limit)
    return ReconcileResponse(
        settled=[
            ReceiptResponse(
                transaction_id=receipt.transaction_id,
                session_id=receipt.session_id,
                tutor_id=receipt.tutor_id,
                amount=receipt.amount,
                already_settled=receipt.already_settled,
            )
            for receipt in receipts
        ]
    )
