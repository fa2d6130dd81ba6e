# This project was developed with assistance from AI tools.
"""
Caller identity and role-based access control.

Authentication happens upstream: the gateway validates the session and
forwards the caller's identity in ``X-User-Id`` / ``X-User-Role`` (and
optionally ``X-User-Email``). This module turns those headers into a
UserContext and provides FastAPI dependencies for route-level RBAC.

Set AUTH_DISABLED=true to act as a dev admin without headers (tests / local dev).
"""

import logging
from typing import Annotated

from db.enums import UserRole
from fastapi import Depends, HTTPException, Request, status

from ..core.config import settings
from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)

_DISABLED_USER = UserContext(
    user_id="dev-user",
    role=UserRole.ADMIN,
    email="dev@board-package.local",
    name="Dev User",
)


def _resolve_role(raw: str | None) -> UserRole:
    """Map the forwarded role header onto a known role."""
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No recognized role assigned",
        )
    try:
        return UserRole(raw.strip().upper())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No recognized role assigned",
        ) from exc


async def get_current_user(request: Request) -> UserContext:
    """FastAPI dependency: return the caller forwarded by the gateway.

    When AUTH_DISABLED=true, returns a dev admin user.
    """
    if settings.AUTH_DISABLED:
        return _DISABLED_USER

    user_id = request.headers.get("X-User-Id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller identity",
        )

    return UserContext(
        user_id=user_id,
        role=_resolve_role(request.headers.get("X-User-Role")),
        email=request.headers.get("X-User-Email"),
    )


# Type alias for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def require_roles(*allowed_roles: UserRole):
    """Dependency factory: restrict a route to specific roles.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def _check(user: CurrentUser) -> UserContext:
        if user.role not in allowed_roles:
            logger.warning(
                "RBAC denied: user=%s role=%s attempted route requiring %s",
                user.user_id,
                user.role.value,
                [r.value for r in allowed_roles],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return user

    return _check
