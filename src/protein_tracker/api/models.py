"""Request and response models for the HTTP API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from protein_tracker.domain.foods import FoodRecord, FoodSource
from protein_tracker.domain.ledger import MealType
from protein_tracker.domain.recognition import ClassifierState, RecognitionStatus


class FoodRecordModel(BaseModel):
    """Serialized food record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str = Field(min_length=1)
    brand: str = ""
    protein_per_100: float = Field(ge=0)
    protein_per_serving: float = Field(ge=0)
    serving_size: float = Field(default=100.0, gt=0)
    serving_unit: str = "g"
    source: FoodSource
    confidence: int | None = Field(default=None, ge=0, le=100)
    image: str | None = None
    label: str | None = None

    def to_record(self) -> FoodRecord:
        """Convert back into the domain record."""
        return FoodRecord(**self.model_dump())


class SearchResponse(BaseModel):
    query: str
    foods: list[FoodRecordModel]


class RecognitionResponse(BaseModel):
    status: RecognitionStatus
    foods: list[FoodRecordModel]
    error: str | None = None


class ClassifierStatusResponse(BaseModel):
    state: ClassifierState
    error: str | None = None


class LogEntryRequest(BaseModel):
    """Body for logging a resolved food under a meal."""

    food: FoodRecordModel
    meal: MealType
    serving_size: float


class LedgerEntryModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    day: date
    meal: MealType
    name: str
    brand: str
    protein_g: float
    serving_size: float
    serving_unit: str
    source: FoodSource
    food_id: str | None
    logged_at: datetime


class ProgressModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_protein_g: float
    goal_g: float
    percent: float
    remaining_g: float
    goal_reached: bool


class DailyLogResponse(BaseModel):
    day: date
    goal_g: float
    total_protein_g: float
    entries: list[LedgerEntryModel]
    progress: ProgressModel


class DailyTotalsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    protein_g: float
    entry_count: int


class RecentFoodModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    protein_per_100: float
    serving_size: float
    serving_unit: str
    source: FoodSource
    last_used_at: datetime


class GoalModel(BaseModel):
    goal_g: float
