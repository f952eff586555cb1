"""Daily protein ledger service."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from protein_tracker.domain.errors import InvalidGoalError
from protein_tracker.domain.foods import FoodRecord, round1
from protein_tracker.domain.ledger import (
    DailyLog,
    DailyProgress,
    DailyTotals,
    LedgerEntry,
    MealType,
    RecentFood,
)
from protein_tracker.services.scaling import build_entry

RECENT_FOODS_LIMIT = 20


class LedgerRepository(Protocol):
    """Persistence interface for ledger entries and settings."""

    def add_entry(self, entry: LedgerEntry) -> None:
        """Store a new entry."""

    def remove_entry(self, day: date, entry_id: UUID) -> bool:
        """Delete an entry, returning whether it existed."""

    def list_entries(self, start: date, end: date) -> list[LedgerEntry]:
        """Return entries for days in ``[start, end]``, oldest first."""

    def get_goal(self) -> float | None:
        """Return the stored daily goal, if one was set."""

    def set_goal(self, goal_g: float) -> None:
        """Store the daily goal."""

    def upsert_recent_food(self, food: RecentFood) -> None:
        """Insert or refresh a recent food keyed by name."""

    def list_recent_foods(self, limit: int) -> list[RecentFood]:
        """Return recent foods, most recently used first."""

    def prune_recent_foods(self, keep: int) -> None:
        """Drop all but the ``keep`` most recently used foods."""


@dataclass
class LedgerService:
    """Logs confirmed foods per day and reports progress against the goal."""

    repository: LedgerRepository
    default_goal_g: float = 150.0

    def get_goal(self) -> float:
        """Return the daily goal, falling back to the default."""
        stored = self.repository.get_goal()
        return stored if stored is not None else self.default_goal_g

    def set_goal(self, goal_g: float) -> float:
        """Set a new daily goal."""
        if not math.isfinite(goal_g) or goal_g <= 0:
            raise InvalidGoalError(f"Protein goal must be positive, got {goal_g}")
        self.repository.set_goal(goal_g)
        return goal_g

    def get_day(self, day: date) -> DailyLog:
        """Return the log for a calendar day."""
        entries = self.repository.list_entries(day, day)
        return DailyLog(
            day=day,
            goal_g=self.get_goal(),
            entries=entries,
            total_protein_g=_total_protein(entries),
        )

    def get_progress(self, day: date) -> DailyProgress:
        """Return progress of a day's total against the goal."""
        return compute_progress(self.get_day(day))

    def log_food(
        self, day: date, meal: MealType, record: FoodRecord, serving_size: float
    ) -> DailyLog:
        """Scale a resolved food to the serving and append it to the day."""
        entry = build_entry(record, serving_size=serving_size, meal=meal, day=day)
        self.repository.add_entry(entry)
        self.repository.upsert_recent_food(
            RecentFood(
                name=record.name,
                protein_per_100=record.protein_per_100,
                serving_size=serving_size,
                serving_unit=record.serving_unit,
                source=record.source,
                last_used_at=entry.logged_at,
            )
        )
        self.repository.prune_recent_foods(RECENT_FOODS_LIMIT)
        return self.get_day(day)

    def remove_entry(self, day: date, entry_id: UUID) -> DailyLog | None:
        """Remove an entry; ``None`` when it doesn't exist."""
        if not self.repository.remove_entry(day, entry_id):
            return None
        return self.get_day(day)

    def history(self, start: date, end: date) -> list[DailyTotals]:
        """Return per-day totals in a range, newest first.

        Days without entries are omitted.
        """
        by_day: dict[date, list[LedgerEntry]] = {}
        for entry in self.repository.list_entries(start, end):
            by_day.setdefault(entry.day, []).append(entry)
        return [
            DailyTotals(
                day=day,
                protein_g=_total_protein(entries),
                entry_count=len(entries),
            )
            for day, entries in sorted(by_day.items(), reverse=True)
        ]

    def recent_foods(self, limit: int = RECENT_FOODS_LIMIT) -> list[RecentFood]:
        """Return recently logged foods."""
        return self.repository.list_recent_foods(min(limit, RECENT_FOODS_LIMIT))


def compute_progress(log: DailyLog) -> DailyProgress:
    """Compute percent (capped at 100) and remaining grams for a day."""
    total = log.total_protein_g
    goal = log.goal_g
    percent = min(total / goal * 100, 100.0) if goal > 0 else 100.0
    return DailyProgress(
        total_protein_g=total,
        goal_g=goal,
        percent=round1(percent),
        remaining_g=round1(max(goal - total, 0.0)),
        goal_reached=total >= goal,
    )


def _total_protein(entries: list[LedgerEntry]) -> float:
    return round1(sum(entry.protein_g for entry in entries))
