"""Supabase repository for the protein ledger."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from protein_tracker.domain.foods import FoodSource
from protein_tracker.domain.ledger import LedgerEntry, MealType, RecentFood
from protein_tracker.services.ledger import LedgerRepository

_SETTINGS_ROW_ID = 1


@dataclass
class SupabaseLedgerRepository(LedgerRepository):
    """Supabase implementation for ledger entries, goal and recent foods."""

    client: Client

    def add_entry(self, entry: LedgerEntry) -> None:
        """Insert a ledger entry row."""
        response = (
            self.client.table("ledger_entries")
            .insert(
                {
                    "id": str(entry.id),
                    "day": entry.day.isoformat(),
                    "meal": entry.meal.value,
                    "name": entry.name,
                    "brand": entry.brand,
                    "protein_g": entry.protein_g,
                    "serving_size": entry.serving_size,
                    "serving_unit": entry.serving_unit,
                    "source": entry.source.value,
                    "food_id": entry.food_id,
                    "logged_at": entry.logged_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create ledger entry")

    def remove_entry(self, day: date, entry_id: UUID) -> bool:
        """Delete an entry for a day."""
        response = (
            self.client.table("ledger_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("day", day.isoformat())
            .execute()
        )
        return bool(response.data)

    def list_entries(self, start: date, end: date) -> list[LedgerEntry]:
        """Return entries between two days, inclusive."""
        response = (
            self.client.table("ledger_entries")
            .select(
                "id, day, meal, name, brand, protein_g, serving_size, serving_unit, "
                "source, food_id, logged_at"
            )
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("logged_at")
            .execute()
        )
        return [_entry_from_row(row) for row in response.data or []]

    def get_goal(self) -> float | None:
        """Return the stored goal, if any."""
        response = (
            self.client.table("ledger_settings")
            .select("protein_goal_g")
            .eq("id", _SETTINGS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("protein_goal_g")
        return float(value) if value is not None else None

    def set_goal(self, goal_g: float) -> None:
        """Store the goal in the single settings row."""
        self.client.table("ledger_settings").upsert(
            {"id": _SETTINGS_ROW_ID, "protein_goal_g": goal_g}
        ).execute()

    def upsert_recent_food(self, food: RecentFood) -> None:
        """Insert or refresh a recent food by name."""
        self.client.table("recent_foods").upsert(
            {
                "name": food.name,
                "protein_per_100": food.protein_per_100,
                "serving_size": food.serving_size,
                "serving_unit": food.serving_unit,
                "source": food.source.value,
                "last_used_at": food.last_used_at.isoformat(),
            },
            on_conflict="name",
        ).execute()

    def prune_recent_foods(self, keep: int) -> None:
        """Delete recent foods beyond the newest ``keep`` rows."""
        response = (
            self.client.table("recent_foods")
            .select("name")
            .order("last_used_at", desc=True)
            .execute()
        )
        stale = [row["name"] for row in (response.data or [])[keep:]]
        if stale:
            self.client.table("recent_foods").delete().in_("name", stale).execute()

    def list_recent_foods(self, limit: int) -> list[RecentFood]:
        """Return recent foods, newest first."""
        response = (
            self.client.table("recent_foods")
            .select(
                "name, protein_per_100, serving_size, serving_unit, source, "
                "last_used_at"
            )
            .order("last_used_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [
            RecentFood(
                name=row["name"],
                protein_per_100=float(row["protein_per_100"]),
                serving_size=float(row["serving_size"]),
                serving_unit=row["serving_unit"],
                source=FoodSource(row["source"]),
                last_used_at=datetime.fromisoformat(row["last_used_at"]),
            )
            for row in response.data or []
        ]


def _entry_from_row(row: dict[str, object]) -> LedgerEntry:
    return LedgerEntry(
        id=UUID(str(row["id"])),
        day=date.fromisoformat(str(row["day"])),
        meal=MealType(row["meal"]),
        name=str(row["name"]),
        brand=str(row.get("brand") or ""),
        protein_g=float(row["protein_g"]),
        serving_size=float(row["serving_size"]),
        serving_unit=str(row["serving_unit"]),
        source=FoodSource(row["source"]),
        food_id=row.get("food_id"),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
    )
