"""Feed inventory stock levels and status."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from farm_metrics.domain.models import (
    ADJUST_ADD,
    ADJUST_SET,
    ADJUST_SUBTRACT,
    STATUS_CRITICAL,
    STATUS_NORMAL,
    STATUS_WARNING,
    InventoryItem,
)
from farm_metrics.domain.state import FarmState

logger = logging.getLogger(__name__)

ADJUSTMENT_TYPES = frozenset({ADJUST_ADD, ADJUST_SUBTRACT, ADJUST_SET})
LEVEL_FIELDS = frozenset({"min_level", "optimal_level", "daily_usage"})


@dataclass(frozen=True)
class StockPolicy:
    """Thresholds relative to an item's minimum level.

    Stock at or below ``min_level * critical_ratio`` is critical, at or below
    ``min_level * warning_ratio`` is a warning.
    """

    critical_ratio: float = 0.5
    warning_ratio: float = 1.0
    days_sentinel: int = 999


def stock_status(stock: float, min_level: float, policy: StockPolicy) -> str:
    if stock <= min_level * policy.critical_ratio:
        return STATUS_CRITICAL
    if stock <= min_level * policy.warning_ratio:
        return STATUS_WARNING
    return STATUS_NORMAL


def days_remaining(stock: float, daily_usage: float, policy: StockPolicy) -> int:
    if daily_usage <= 0:
        return policy.days_sentinel
    return math.floor(stock / daily_usage)


def refresh_item(item: InventoryItem, policy: StockPolicy) -> InventoryItem:
    """Recompute the derived fields of an item."""
    return replace(
        item,
        days_remaining=days_remaining(item.current_stock, item.daily_usage, policy),
        status=stock_status(item.current_stock, item.min_level, policy),
    )


def adjusted_stock(current: float, adjustment_type: str, quantity: float) -> float:
    """Apply an add, subtract or set adjustment, never going below zero."""
    if adjustment_type not in ADJUSTMENT_TYPES:
        msg = f"Unknown adjustment type: {adjustment_type}"
        raise ValueError(msg)
    if quantity < 0:
        msg = "Adjustment quantity must not be negative"
        raise ValueError(msg)
    if adjustment_type == ADJUST_ADD:
        return current + quantity
    if adjustment_type == ADJUST_SUBTRACT:
        return max(0.0, current - quantity)
    return quantity


@dataclass
class InventoryService:
    """Mutations on inventory items that keep derived fields current."""

    state: FarmState
    policy: StockPolicy

    def add_item(  # noqa: PLR0913
        self,
        name: str,
        current_stock: float,
        min_level: float,
        optimal_level: float,
        unit: str,
        daily_usage: float,
    ) -> InventoryItem:
        """Create an inventory item with computed status."""
        item = refresh_item(
            InventoryItem(
                id=uuid4(),
                name=name,
                current_stock=max(0.0, float(current_stock)),
                min_level=_non_negative("min_level", min_level),
                optimal_level=_non_negative("optimal_level", optimal_level),
                unit=unit,
                daily_usage=_non_negative("daily_usage", daily_usage),
                last_updated=_today(),
            ),
            self.policy,
        )
        self.state.inventory.append(item)
        return item

    def update_item(self, item_id: UUID, changes: dict[str, object]) -> InventoryItem:
        """Replace editable fields of an item; derived fields are recomputed."""
        item = self._require(item_id)
        editable = {
            key: value
            for key, value in changes.items()
            if key in {"name", "min_level", "optimal_level", "unit", "daily_usage"}
        }
        for key in editable.keys() & LEVEL_FIELDS:
            editable[key] = _non_negative(key, editable[key])
        updated = refresh_item(replace(item, **editable), self.policy)
        self._store(updated)
        return updated

    def adjust(
        self, item_id: UUID, adjustment_type: str, quantity: float
    ) -> InventoryItem:
        """Apply a stock adjustment and return the refreshed item."""
        item = self._require(item_id)
        stock = adjusted_stock(item.current_stock, adjustment_type, quantity)
        updated = refresh_item(
            replace(item, current_stock=stock, last_updated=_today()), self.policy
        )
        self._store(updated)
        logger.info(
            "Adjusted %s (%s %s): %s -> %s %s",
            item.name,
            adjustment_type,
            quantity,
            item.current_stock,
            stock,
            item.unit,
        )
        if updated.status != item.status:
            logger.info("%s status %s -> %s", item.name, item.status, updated.status)
        return updated

    def refresh_all(self) -> list[InventoryItem]:
        """Recompute derived fields of every item."""
        self.state.inventory = [
            refresh_item(item, self.policy) for item in self.state.inventory
        ]
        return list(self.state.inventory)

    def _require(self, item_id: UUID) -> InventoryItem:
        item = self.state.find_item(item_id)
        if item is None:
            msg = f"Inventory item {item_id} not found"
            raise LookupError(msg)
        return item

    def _store(self, updated: InventoryItem) -> None:
        self.state.inventory = [
            updated if item.id == updated.id else item for item in self.state.inventory
        ]


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _non_negative(name: str, value: object) -> float:
    number = float(value)
    if number < 0:
        msg = f"{name} must not be negative"
        raise ValueError(msg)
    return number
