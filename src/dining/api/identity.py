"""Caller identity as forwarded by the upstream gateway.

Authentication happens before requests reach this service; the gateway
passes the authenticated user in ``X-User-Id`` and their role in
``X-User-Role``.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header, HTTPException

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Caller:
    user_id: str | None
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def current_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    """Return the caller, who may be anonymous."""
    return Caller(user_id=x_user_id or None, role=(x_user_role or "").lower() or None)


def require_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    """Raise 401 if no user is forwarded."""
    caller = current_caller(x_user_id, x_user_role)
    if not caller.user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return caller


def require_admin(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Caller:
    """Raise 401 if no user is forwarded, 403 if they are not an admin."""
    caller = require_user(x_user_id, x_user_role)
    if not caller.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return caller
