"""Ledger API endpoints: daily logs, goal, history and recent foods."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from protein_tracker.api.models import (
    DailyLogResponse,
    DailyTotalsModel,
    GoalModel,
    LedgerEntryModel,
    LogEntryRequest,
    ProgressModel,
    RecentFoodModel,
)
from protein_tracker.domain.errors import InvalidGoalError, InvalidServingSizeError
from protein_tracker.services.ledger import compute_progress

if TYPE_CHECKING:
    from protein_tracker.containers import AppContainer
    from protein_tracker.domain.ledger import DailyLog

router = APIRouter(tags=["ledger"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/goal")
async def get_goal(request: Request) -> GoalModel:
    """Return the daily protein goal."""
    return GoalModel(goal_g=_container(request).ledger_service.get_goal())


@router.put("/goal")
async def set_goal(body: GoalModel, request: Request) -> GoalModel:
    """Update the daily protein goal."""
    try:
        goal = _container(request).ledger_service.set_goal(body.goal_g)
    except InvalidGoalError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return GoalModel(goal_g=goal)


@router.get("/ledger/history")
async def history(start: date, end: date, request: Request) -> list[DailyTotalsModel]:
    """Return per-day totals between two dates, newest first."""
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end must not be before start",
        )
    rows = _container(request).ledger_service.history(start, end)
    return [DailyTotalsModel.model_validate(row) for row in rows]


@router.get("/ledger/recent")
async def recent_foods(request: Request, limit: int = 20) -> list[RecentFoodModel]:
    """Return recently logged foods."""
    foods = _container(request).ledger_service.recent_foods(limit)
    return [RecentFoodModel.model_validate(food) for food in foods]


@router.get("/ledger/{day}")
async def get_day(day: date, request: Request) -> DailyLogResponse:
    """Return a day's entries, total and progress."""
    return _log_response(_container(request).ledger_service.get_day(day))


@router.post("/ledger/{day}/entries", status_code=status.HTTP_201_CREATED)
async def log_entry(
    day: date, body: LogEntryRequest, request: Request
) -> DailyLogResponse:
    """Log a resolved food at the chosen serving size."""
    try:
        log = _container(request).ledger_service.log_food(
            day, body.meal, body.food.to_record(), body.serving_size
        )
    except InvalidServingSizeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return _log_response(log)


@router.delete("/ledger/{day}/entries/{entry_id}")
async def remove_entry(day: date, entry_id: UUID, request: Request) -> DailyLogResponse:
    """Remove a logged entry."""
    log = _container(request).ledger_service.remove_entry(day, entry_id)
    if log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _log_response(log)


def _log_response(log: DailyLog) -> DailyLogResponse:
    return DailyLogResponse(
        day=log.day,
        goal_g=log.goal_g,
        total_protein_g=log.total_protein_g,
        entries=[LedgerEntryModel.model_validate(entry) for entry in log.entries],
        progress=ProgressModel.model_validate(compute_progress(log)),
    )
