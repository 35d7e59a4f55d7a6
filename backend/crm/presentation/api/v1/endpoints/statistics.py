"""Dashboard and statistics endpoints."""

from fastapi import APIRouter, Depends, Query

from crm.application.schemas import DashboardResponse, StatisticsResponse
from crm.application.services import StatisticsService
from crm.domain.entities import TimeWindow
from crm.infrastructure.dependencies import get_statistics_service

router = APIRouter(prefix="/statistics", tags=["Statistics"])


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    service: StatisticsService = Depends(get_statistics_service),
) -> DashboardResponse:
    """Overview widgets: totals, popular product, latest activity, growth."""
    return DashboardResponse.from_entity(service.dashboard())


@router.get("", response_model=StatisticsResponse)
def get_statistics(
    window: TimeWindow = Query(TimeWindow.ALL, description="Time range for the charts"),
    service: StatisticsService = Depends(get_statistics_service),
) -> StatisticsResponse:
    """Category breakdown and top products within a time window."""
    return StatisticsResponse.from_entity(service.report(window))
