"""Activity log endpoint."""

from fastapi import APIRouter, Depends, Query

from crm.application.schemas import ActivityResponse
from crm.application.services import ActivityLog
from crm.infrastructure.dependencies import get_activity_log

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.get("", response_model=list[ActivityResponse])
def list_activities(
    limit: int = Query(10, ge=1, le=50),
    activity_log: ActivityLog = Depends(get_activity_log),
) -> list[ActivityResponse]:
    """Most recent activity entries, newest first."""
    return [ActivityResponse.from_entity(e) for e in activity_log.recent(limit)]
