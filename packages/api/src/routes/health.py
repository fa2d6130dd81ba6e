# This project was developed with assistance from AI tools.
"""Liveness and readiness probes."""

from db import DatabaseService, get_db_service
from fastapi import APIRouter, Depends, HTTPException, status

router = APIRouter()


@router.get("/")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready")
async def ready(db_service: DatabaseService = Depends(get_db_service)) -> dict[str, str]:
    if not await db_service.health_check():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        )
    return {"status": "ready"}
