"""Dashboard facade over one farm state."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from farm_metrics.domain.metrics import DashboardSummary, FeedCostShare
from farm_metrics.domain.models import (
    STATUS_CRITICAL,
    STATUS_WARNING,
    DeleteResult,
    EggSettings,
    Feed,
    Flock,
    FlockDetail,
    InventoryItem,
    Notification,
    Purchase,
)
from farm_metrics.domain.state import FarmState
from farm_metrics.services import metrics
from farm_metrics.services.catalog import CatalogService
from farm_metrics.services.flocks import FlockService
from farm_metrics.services.inventory import InventoryService
from farm_metrics.services.notifications import NotificationService
from farm_metrics.services.purchases import PurchaseService

logger = logging.getLogger(__name__)


@dataclass
class FarmService:
    """Queries and mutations exposed to the dashboard.

    Every mutation finishes with :meth:`sync` so derived inventory fields and
    stock alerts never lag behind the base records.
    """

    state: FarmState
    catalog: CatalogService
    purchases: PurchaseService
    inventory: InventoryService
    notifications: NotificationService
    flocks: FlockService

    # Queries

    def total_cost(self, month: int | None = None, year: int | None = None) -> float:
        return metrics.total_cost(self.state, self._month(month), year)

    def feed_cost_percentage(
        self, month: int | None = None, year: int | None = None
    ) -> list[FeedCostShare]:
        return metrics.feed_cost_percentage(self.state, self._month(month), year)

    def nutrition_contribution(
        self, month: int | None = None, year: int | None = None
    ) -> dict[str, float]:
        return metrics.nutrition_contribution(self.state, self._month(month), year)

    def egg_unit_cost(self) -> float:
        return metrics.egg_unit_cost(self.state)

    def break_even_eggs(self) -> int:
        return metrics.break_even_eggs(self.state)

    def profit(self) -> float:
        return metrics.profit(self.state)

    def profit_margin(self) -> float:
        return metrics.profit_margin(self.state)

    def summary(self) -> DashboardSummary:
        """Return the headline figures for the selected month."""
        month = self.state.current_month
        statuses = [item.status for item in self.state.inventory]
        return DashboardSummary(
            month=month,
            economics=metrics.egg_economics(self.state),
            cost_distribution=metrics.feed_cost_percentage(self.state, month),
            nutrition=metrics.nutrition_contribution(self.state, month),
            unread_notifications=self.notifications.unread_count(),
            critical_items=statuses.count(STATUS_CRITICAL),
            warning_items=statuses.count(STATUS_WARNING),
            total_birds=metrics.total_birds(self.state),
            laying_rate=metrics.laying_rate(self.state),
            last_sync=self.state.last_sync,
        )

    # Mutations

    def add_feed(
        self,
        name: str,
        unit_cost: float,
        unit: str,
        nutrients: dict[str, float] | None = None,
    ) -> Feed:
        feed = self.catalog.add_feed(name, unit_cost, unit, nutrients)
        self.sync()
        return feed

    def update_feed(self, feed_id: UUID, changes: dict[str, object]) -> Feed:
        feed = self.catalog.update_feed(feed_id, changes)
        self.sync()
        return feed

    def delete_feed(self, feed_id: UUID) -> DeleteResult:
        result = self.catalog.delete_feed(feed_id)
        if result.deleted:
            self.sync()
        return result

    def add_nutrient(self, label: str) -> str | None:
        key = self.catalog.add_nutrient(label)
        if key is not None:
            self.sync()
        return key

    def remove_nutrient(self, key: str) -> bool:
        removed = self.catalog.remove_nutrient(key)
        if removed:
            self.sync()
        return removed

    def add_purchase(
        self,
        feed_id: UUID,
        quantity: float,
        feeding_ratio: float,
        purchase_date: date,
    ) -> Purchase:
        purchase = self.purchases.add_purchase(
            feed_id, quantity, feeding_ratio, purchase_date
        )
        self.sync()
        return purchase

    def delete_purchase(self, purchase_id: UUID) -> bool:
        deleted = self.purchases.delete_purchase(purchase_id)
        if deleted:
            self.sync()
        return deleted

    def add_inventory_item(  # noqa: PLR0913
        self,
        name: str,
        current_stock: float,
        min_level: float,
        optimal_level: float,
        unit: str,
        daily_usage: float,
    ) -> InventoryItem:
        item = self.inventory.add_item(
            name, current_stock, min_level, optimal_level, unit, daily_usage
        )
        self.sync()
        return item

    def update_inventory_item(
        self, item_id: UUID, changes: dict[str, object]
    ) -> InventoryItem:
        item = self.inventory.update_item(item_id, changes)
        self.sync()
        return item

    def adjust_inventory(
        self, item_id: UUID, adjustment_type: str, quantity: float
    ) -> InventoryItem:
        """Add to, subtract from or set an item's stock."""
        self.inventory.adjust(item_id, adjustment_type, quantity)
        self.sync()
        item = self.state.find_item(item_id)
        if item is None:
            msg = f"Inventory item {item_id} not found"
            raise LookupError(msg)
        return item

    def update_egg_settings(
        self,
        egg_count: int,
        egg_price: float,
        daily_egg_production: int | None = None,
    ) -> EggSettings:
        """Replace egg settings; daily output is kept unless given."""
        daily = (
            self.state.egg_settings.daily_egg_production
            if daily_egg_production is None
            else int(daily_egg_production)
        )
        self.state.egg_settings = EggSettings(
            egg_count=int(egg_count),
            egg_price=float(egg_price),
            daily_egg_production=daily,
        )
        self.sync()
        return self.state.egg_settings

    def add_flock(self, name: str, bird_count: int, age_weeks: int) -> Flock:
        flock = self.flocks.add_flock(name, bird_count, age_weeks)
        self.sync()
        return flock

    def update_flock(self, flock_id: UUID, changes: dict[str, object]) -> Flock:
        flock = self.flocks.update_flock(flock_id, changes)
        self.sync()
        return flock

    def flock_detail(self, flock_id: UUID) -> FlockDetail | None:
        return self.flocks.flock_detail(flock_id)

    def update_flock_detail(
        self, flock_id: UUID, changes: dict[str, object]
    ) -> FlockDetail:
        detail = self.flocks.update_flock_detail(flock_id, changes)
        self.sync()
        return detail

    def set_month(self, month: int) -> None:
        """Select the month used by egg economics."""
        if not 1 <= month <= metrics.MONTHS_IN_YEAR:
            msg = f"Month must be between 1 and 12, got {month}"
            raise ValueError(msg)
        self.state.current_month = month
        self.sync()

    def mark_notification_read(self, notification_id: UUID) -> bool:
        return self.notifications.mark_read(notification_id)

    def mark_all_notifications_read(self) -> int:
        return self.notifications.mark_all_read()

    def sync(self) -> list[Notification]:
        """Recompute derived inventory fields and emit pending stock alerts."""
        emitted = []
        for item in self.inventory.refresh_all():
            notification = self.notifications.emit_stock_alert(item)
            if notification is not None:
                emitted.append(notification)
        self.state.last_sync = datetime.now(tz=UTC)
        logger.debug("Sync complete, %d new alerts", len(emitted))
        return emitted

    def _month(self, month: int | None) -> int:
        return self.state.current_month if month is None else month
