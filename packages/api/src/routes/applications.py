# This project was developed with assistance from AI tools.
"""Application completeness, override and submission routes with RBAC enforcement."""

import logging

from db import get_db
from db.enums import UserRole
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import (
    AlreadySubmittedError,
    ApplicationNotFoundError,
    InvalidTransitionError,
    ValidationError,
)
from ..middleware.auth import CurrentUser, require_roles
from ..schemas.application import SectionsRecomputeResponse
from ..schemas.completeness import CompletenessReport
from ..schemas.override import OverrideCreate, OverrideListResponse, SectionOverride
from ..schemas.submission import SubmissionResponse
from ..services import application as app_service
from ..services.completeness import CompletenessEvaluator
from ..services.overrides import OverrideLedger
from ..services.repository import (
    SqlApplicationRepository,
    SqlAuditRepository,
    SqlOverrideRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_ALL_ROLES = tuple(UserRole)
_OVERRIDE_ROLES = (UserRole.BROKER, UserRole.TRANSACTION_AGENT, UserRole.ADMIN)
_SUBMIT_ROLES = (UserRole.APPLICANT, UserRole.BROKER, UserRole.ADMIN)


def get_evaluator() -> CompletenessEvaluator:
    """FastAPI dependency: evaluator configured with the deployment's warning policy."""
    return CompletenessEvaluator(allow_warning_sections=settings.ALLOW_WARNING_SECTIONS)


def _ledger(sync_session: Session) -> OverrideLedger:
    return OverrideLedger(SqlOverrideRepository(sync_session), SqlAuditRepository(sync_session))


def _not_found(exc: ApplicationNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get(
    "/{application_id}/completeness",
    response_model=CompletenessReport,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def get_completeness(
    application_id: str,
    session: AsyncSession = Depends(get_db),
    evaluator: CompletenessEvaluator = Depends(get_evaluator),
) -> CompletenessReport:
    """Per-section completeness and the submission gate for an application."""

    def _run(sync_session: Session) -> CompletenessReport:
        return app_service.get_completeness(
            SqlApplicationRepository(sync_session),
            _ledger(sync_session),
            evaluator,
            application_id,
        )

    try:
        return await session.run_sync(_run)
    except ApplicationNotFoundError as e:
        raise _not_found(e)


@router.get(
    "/{application_id}/overrides",
    response_model=OverrideListResponse,
    dependencies=[Depends(require_roles(*_OVERRIDE_ROLES))],
)
async def list_overrides(
    application_id: str,
    session: AsyncSession = Depends(get_db),
) -> OverrideListResponse:
    """Override history for an application, oldest first."""

    def _run(sync_session: Session) -> list[SectionOverride]:
        return app_service.list_overrides(
            SqlApplicationRepository(sync_session), _ledger(sync_session), application_id
        )

    try:
        overrides = await session.run_sync(_run)
    except ApplicationNotFoundError as e:
        raise _not_found(e)
    return OverrideListResponse(
        application_id=application_id,
        count=len(overrides),
        overrides=overrides,
    )


@router.post(
    "/{application_id}/overrides",
    response_model=SectionOverride,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*_OVERRIDE_ROLES))],
)
async def create_override(
    application_id: str,
    body: OverrideCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> SectionOverride:
    """Manually mark a section complete. A non-blank reason is required."""

    def _run(sync_session: Session) -> SectionOverride:
        return app_service.record_override(
            SqlApplicationRepository(sync_session),
            _ledger(sync_session),
            application_id,
            body.section_key,
            body.section_label,
            user.email or user.user_id,
            body.reason,
        )

    try:
        return await session.run_sync(_run)
    except ApplicationNotFoundError as e:
        raise _not_found(e)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


@router.post(
    "/{application_id}/sections/recompute",
    response_model=SectionsRecomputeResponse,
    dependencies=[Depends(require_roles(*_SUBMIT_ROLES))],
)
async def recompute_sections(
    application_id: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    evaluator: CompletenessEvaluator = Depends(get_evaluator),
) -> SectionsRecomputeResponse:
    """Re-derive section flags from the data the applicant has entered."""

    def _run(sync_session: Session):
        return app_service.recompute_sections(
            SqlApplicationRepository(sync_session),
            _ledger(sync_session),
            evaluator,
            SqlAuditRepository(sync_session),
            application_id,
            user,
        )

    try:
        app, report = await session.run_sync(_run)
    except ApplicationNotFoundError as e:
        raise _not_found(e)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return SectionsRecomputeResponse(
        application_id=app.id,
        sections=app.sections,
        completion_percentage=report.completion_percentage,
        can_submit=report.can_submit,
    )


@router.post(
    "/{application_id}/submit",
    response_model=SubmissionResponse,
    dependencies=[Depends(require_roles(*_SUBMIT_ROLES))],
)
async def submit_application(
    application_id: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
    evaluator: CompletenessEvaluator = Depends(get_evaluator),
) -> SubmissionResponse:
    """Submit an application for board review once every required section is satisfied."""

    def _run(sync_session: Session) -> SubmissionResponse:
        return app_service.submit_application(
            SqlApplicationRepository(sync_session),
            _ledger(sync_session),
            evaluator,
            SqlAuditRepository(sync_session),
            application_id,
            user,
        )

    try:
        return await session.run_sync(_run)
    except ApplicationNotFoundError as e:
        raise _not_found(e)
    except (AlreadySubmittedError, InvalidTransitionError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
