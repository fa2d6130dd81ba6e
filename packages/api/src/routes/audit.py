# This project was developed with assistance from AI tools.
"""Compliance audit trail query endpoints."""

from db import get_db
from db.enums import UserRole
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from ..middleware.auth import require_roles
from ..schemas.audit import AuditByApplicationResponse, AuditChainVerifyResponse
from ..services.audit import get_events_by_application, verify_audit_chain
from ..services.repository import SqlAuditRepository

router = APIRouter()


@router.get(
    "/{application_id}/audit",
    response_model=AuditByApplicationResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.TRANSACTION_AGENT))],
)
async def audit_by_application(
    application_id: str,
    session: AsyncSession = Depends(get_db),
) -> AuditByApplicationResponse:
    """Audit trail for one application, with whole-chain integrity check."""

    def _run(sync_session: Session):
        repo = SqlAuditRepository(sync_session)
        return get_events_by_application(repo, application_id), verify_audit_chain(repo.list_all())

    events, chain = await session.run_sync(_run)
    return AuditByApplicationResponse(
        application_id=application_id,
        count=len(events),
        events=events,
        chain=AuditChainVerifyResponse(**chain),
    )
