"""Pydantic models for API request payloads."""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class FeedCreate(BaseModel):
    """New feed payload."""

    name: str = Field(min_length=1)
    unit_cost: float = Field(ge=0)
    unit: str = "kg"
    nutrients: dict[str, float] = Field(default_factory=dict)


class FeedUpdate(BaseModel):
    """Partial feed update payload."""

    name: str | None = Field(default=None, min_length=1)
    unit_cost: float | None = Field(default=None, ge=0)
    unit: str | None = None
    nutrients: dict[str, float] | None = None


class PurchaseCreate(BaseModel):
    """New purchase payload."""

    feed_id: UUID
    quantity: float = Field(ge=0)
    feeding_ratio: float = Field(ge=0, le=100)
    purchase_date: date


class NutrientCreate(BaseModel):
    """Custom nutrient payload."""

    label: str = Field(min_length=1)


class InventoryItemCreate(BaseModel):
    """New inventory item payload."""

    name: str = Field(min_length=1)
    current_stock: float = Field(ge=0)
    min_level: float = Field(ge=0)
    optimal_level: float = Field(ge=0)
    unit: str = "kg"
    daily_usage: float = Field(default=0, ge=0)


class InventoryItemUpdate(BaseModel):
    """Threshold and usage update payload; stock changes go through adjust."""

    name: str | None = Field(default=None, min_length=1)
    min_level: float | None = Field(default=None, ge=0)
    optimal_level: float | None = Field(default=None, ge=0)
    unit: str | None = None
    daily_usage: float | None = Field(default=None, ge=0)


class InventoryAdjustment(BaseModel):
    """Stock adjustment payload."""

    type: Literal["add", "subtract", "set"]
    quantity: float = Field(ge=0)
    notes: str | None = None


class EggSettingsUpdate(BaseModel):
    """Egg output and price payload."""

    egg_count: int = Field(ge=0)
    egg_price: float = Field(ge=0)
    daily_egg_production: int | None = Field(default=None, ge=0)


class MonthUpdate(BaseModel):
    """Selected month payload."""

    month: int = Field(ge=1, le=12)


class FlockCreate(BaseModel):
    """New flock payload."""

    name: str = Field(min_length=1)
    bird_count: int = Field(ge=0)
    age_weeks: int = Field(ge=0)


class FlockUpdate(BaseModel):
    """Partial flock update payload."""

    name: str | None = Field(default=None, min_length=1)
    bird_count: int | None = Field(default=None, ge=0)
    age_weeks: int | None = Field(default=None, ge=0)


class FlockDetailUpdate(BaseModel):
    """Flock health and performance payload."""

    health_status: str | None = None
    mortality_rate: float | None = Field(default=None, ge=0)
    feed_conversion_ratio: float | None = Field(default=None, ge=0)
    notes: str | None = None
