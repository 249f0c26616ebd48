"""CSV exports and JSON backup of the farm state."""

import logging
from datetime import UTC, datetime
from uuid import UUID

import pandas as pd
from pydantic import BaseModel, Field, ValidationError

from farm_metrics.domain.models import (
    EggSettings,
    Feed,
    Flock,
    FlockDetail,
    InventoryItem,
    Notification,
    Purchase,
)
from farm_metrics.domain.nutrients import CORE_NUTRIENTS, NutrientRegistry
from farm_metrics.domain.state import FarmState
from farm_metrics.services.catalog import CatalogService
from farm_metrics.services.inventory import StockPolicy, refresh_item
from farm_metrics.services.metrics import monthly_nutrition_table

logger = logging.getLogger(__name__)

BACKUP_VERSION = 1


class BackupError(ValueError):
    """Raised when a backup document cannot be restored."""


class BackupDocument(BaseModel):
    """Structured backup of every record in a farm state."""

    version: int = BACKUP_VERSION
    exported_at: datetime
    current_month: int = Field(ge=1, le=12)
    egg_settings: EggSettings
    feeds: list[Feed] = Field(default_factory=list)
    purchases: list[Purchase] = Field(default_factory=list)
    inventory: list[InventoryItem] = Field(default_factory=list)
    flocks: list[Flock] = Field(default_factory=list)
    flock_details: list[FlockDetail] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)
    nutrient_labels: dict[str, str] = Field(default_factory=dict)
    nutrient_visibility: dict[str, bool] = Field(default_factory=dict)
    unread_alerts: dict[UUID, list[str]] | None = None


def feeds_csv(state: FarmState) -> str:
    """Feeds with one percentage column per registered nutrient."""
    keys = state.nutrients.keys()
    columns = ["id", "name", "unit_cost", "unit", *[f"{key} (%)" for key in keys]]
    rows = [
        [
            str(feed.id),
            feed.name,
            feed.unit_cost,
            feed.unit,
            *[feed.nutrients.get(key, 0.0) for key in keys],
        ]
        for feed in state.feeds
    ]
    return _to_csv(rows, columns)


def purchases_csv(state: FarmState) -> str:
    """Purchases with their feed's unit cost; orphaned purchases are left out."""
    columns = [
        "id",
        "feed_id",
        "feed_name",
        "quantity",
        "unit_cost",
        "total",
        "purchase_date",
    ]
    rows = []
    for purchase in state.purchases:
        feed = state.find_feed(purchase.feed_id)
        if feed is None:
            continue
        rows.append(
            [
                str(purchase.id),
                str(feed.id),
                feed.name,
                purchase.quantity,
                feed.unit_cost,
                feed.unit_cost * purchase.quantity,
                purchase.purchase_date.isoformat(),
            ]
        )
    return _to_csv(rows, columns)


def nutrition_csv(state: FarmState, year: int | None = None) -> str:
    """Monthly nutrition composition and feed cost for a year."""
    keys = state.nutrients.visible_keys()
    columns = ["month", *[f"{key} (%)" for key in keys], "total_cost"]
    rows = [
        [row.month, *[row.nutrients[key] for key in keys], row.total_cost]
        for row in monthly_nutrition_table(state, year)
    ]
    return _to_csv(rows, columns)


def export_backup(state: FarmState) -> str:
    """Serialize the full state as indented JSON."""
    document = BackupDocument(
        exported_at=datetime.now(tz=UTC),
        current_month=state.current_month,
        egg_settings=state.egg_settings,
        feeds=state.feeds,
        purchases=state.purchases,
        inventory=state.inventory,
        flocks=state.flocks,
        flock_details=state.flock_details,
        notifications=state.notifications,
        nutrient_labels=state.nutrients.labels,
        nutrient_visibility=state.nutrients.visible,
        unread_alerts=state.unread_alerts,
    )
    return document.model_dump_json(indent=2)


def load_backup(raw: str | bytes, policy: StockPolicy) -> FarmState:
    """Rebuild a state from a backup, recomputing inventory derived fields."""
    try:
        document = BackupDocument.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Invalid backup document: {exc.error_count()} errors"
        raise BackupError(msg) from exc
    if document.version != BACKUP_VERSION:
        msg = f"Unsupported backup version: {document.version}"
        raise BackupError(msg)

    labels = dict(document.nutrient_labels)
    for key, label in CORE_NUTRIENTS.items():
        labels.setdefault(key, label)
    visible = {key: document.nutrient_visibility.get(key, True) for key in labels}
    state = FarmState(
        feeds=list(document.feeds),
        purchases=list(document.purchases),
        inventory=[refresh_item(item, policy) for item in document.inventory],
        egg_settings=document.egg_settings,
        notifications=list(document.notifications),
        flocks=list(document.flocks),
        flock_details=list(document.flock_details),
        nutrients=NutrientRegistry(labels=labels, visible=visible),
        current_month=document.current_month,
        unread_alerts=(
            _unread_alerts(document.notifications)
            if document.unread_alerts is None
            else document.unread_alerts
        ),
    )
    try:
        CatalogService(state).align_feed_nutrients()
    except ValueError as exc:
        msg = f"Invalid feed nutrients: {exc}"
        raise BackupError(msg) from exc
    logger.info(
        "Restored backup from %s: %d feeds, %d purchases, %d inventory items",
        document.exported_at.isoformat(),
        len(state.feeds),
        len(state.purchases),
        len(state.inventory),
    )
    return state


def _unread_alerts(notifications: list[Notification]) -> dict[UUID, list[str]]:
    """Rebuild unread alert tracking from the notification log."""
    pending: dict[UUID, list[str]] = {}
    for notification in notifications:
        if notification.read or notification.item_id is None:
            continue
        if notification.status is None:
            continue
        statuses = pending.setdefault(notification.item_id, [])
        if notification.status not in statuses:
            statuses.append(notification.status)
    return pending


def _to_csv(rows: list[list[object]], columns: list[str]) -> str:
    frame = pd.DataFrame(rows, columns=columns)
    return frame.to_csv(index=False, lineterminator="\n")
