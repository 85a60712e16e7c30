"""Company (tenant) dependency: X-Company-ID header plus active membership."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from worktrack.core.config import get_settings
from worktrack.domain.enums import MembershipScope
from worktrack.domain.exceptions import AuthorizationException, ValidationException
from worktrack.infrastructure.persistence.database import get_db
from worktrack.infrastructure.persistence.repositories import MembershipRepository

from .auth import get_current_user_id


async def get_company_id(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> str:
    """Resolve company id from the header; the caller must be an active member."""
    name = get_settings().company_header_name
    value = (request.headers.get(name) or "").strip()
    if not value:
        raise ValidationException(f"Missing required header: {name}", field=name)
    membership = MembershipRepository(db)
    if not await membership.is_active_member(MembershipScope.COMPANY, value, user_id):
        raise AuthorizationException(resource="company", action="access")
    return value
