"""Service interfaces (ports) for the application layer.

Protocols for the collaborators the task core consumes but does not own:
permission backing data, membership, and the cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from worktrack.domain.enums import MembershipScope


class IPermissionResolver(Protocol):
    """Protocol for resolving user permissions (used by PermissionGate)."""

    async def get_user_permissions(self, user_id: str, company_id: str) -> set[str]:
        """Return set of permission codes (e.g. {'edit_tasks', 'assign_tasks'})."""


class IMembershipOracle(Protocol):
    """Protocol for membership / eligibility lookups."""

    async def is_active_member(
        self, scope: MembershipScope, scope_id: str, user_id: str
    ) -> bool:
        """True if the user is an active member of the department or company."""

    async def department_in_company(self, company_id: str, department_id: str) -> bool:
        """True if the department belongs to the company."""


class ICacheService(Protocol):
    """Minimal cache protocol for permission caching."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""
