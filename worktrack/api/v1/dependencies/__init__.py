"""Presentation-layer dependency injection (composition root).

Routes depend only on these; repositories and services are built here.
"""

from .auth import get_current_user_id
from .company import get_company_id
from .tasks import (
    get_claim_service,
    get_collaboration_service,
    get_task_query_service,
    get_task_service,
    get_timer_service,
    get_transfer_service,
)

__all__ = [
    "get_claim_service",
    "get_collaboration_service",
    "get_company_id",
    "get_current_user_id",
    "get_task_query_service",
    "get_task_service",
    "get_timer_service",
    "get_transfer_service",
]
