"""
Request dependencies shared by the routers.

Callers are authenticated upstream; the gateway forwards the
caller's identity in X-User-ID / X-User-Role headers. This
module only turns those headers into an Actor and checks
roles. Credentials are never validated here.
"""

from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel

from bookkeeping.models.enums import UserRole


class Actor(BaseModel):
    """The authenticated caller of a request."""
    user_id: int
    role: UserRole


def get_current_actor(
    x_user_id: int | None = Header(default=None),
    x_user_role: UserRole | None = Header(default=None),
) -> Actor:
    if x_user_id is None or x_user_role is None or x_user_id <= 0:
        raise HTTPException(
            status_code=401, detail="Authenticated identity required"
        )
    return Actor(user_id=x_user_id, role=x_user_role)


def require_role(*roles: UserRole):
    """Dependency factory: reject callers whose role is not in roles."""

    def check_role(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            raise HTTPException(
                status_code=403,
                detail=f"Requires role: {', '.join(r.value for r in roles)}",
            )
        return actor

    return check_role
