"""Tests for inventory status and stock adjustments."""

from uuid import uuid4

import pytest

from farm_metrics.services.inventory import (
    InventoryService,
    StockPolicy,
    adjusted_stock,
    days_remaining,
    stock_status,
)
from tests.conftest import add_soy_stock


@pytest.mark.parametrize(
    ("stock", "expected"),
    [
        (1001, "normal"),
        (1000, "warning"),
        (501, "warning"),
        (500, "critical"),
        (0, "critical"),
    ],
)
def test_stock_status_thresholds(stock: float, expected: str, policy) -> None:
    assert stock_status(stock, min_level=1000, policy=policy) == expected


def test_stock_status_uses_policy_ratios() -> None:
    policy = StockPolicy(critical_ratio=0.3, warning_ratio=0.5)

    assert stock_status(400, 1000, policy) == "warning"
    assert stock_status(300, 1000, policy) == "critical"
    assert stock_status(600, 1000, policy) == "normal"


def test_days_remaining_floors_and_uses_sentinel(policy) -> None:
    assert days_remaining(850, 100, policy) == 8
    assert days_remaining(850, 0, policy) == 999


def test_adjusted_stock_variants() -> None:
    assert adjusted_stock(100, "add", 50) == 150
    assert adjusted_stock(100, "subtract", 150) == 0
    assert adjusted_stock(100, "set", 20) == 20


def test_adjusted_stock_rejects_bad_input() -> None:
    with pytest.raises(ValueError, match="negative"):
        adjusted_stock(100, "add", -1)
    with pytest.raises(ValueError, match="Unknown adjustment"):
        adjusted_stock(100, "remove-all", 1)


def test_add_item_computes_derived_fields(state, policy) -> None:
    service = InventoryService(state, policy)

    item = service.add_item("Hay", 850, 500, 1500, "kg", 100)

    assert item.days_remaining == 8
    assert item.status == "normal"
    assert item.last_updated is not None
    assert state.inventory == [item]


def test_adjust_recomputes_status(farm_service) -> None:
    item = add_soy_stock(farm_service)

    updated = farm_service.inventory.adjust(item.id, "subtract", 2000)

    assert updated.current_stock == 800
    assert updated.status == "warning"
    assert updated.days_remaining == 3


def test_update_item_recomputes_status(farm_service) -> None:
    item = add_soy_stock(farm_service)

    updated = farm_service.inventory.update_item(
        item.id, {"min_level": 6000, "daily_usage": 0, "current_stock": 1}
    )

    assert updated.current_stock == 2800
    assert updated.status == "critical"
    assert updated.days_remaining == 999


def test_adjust_unknown_item_raises(state, policy) -> None:
    service = InventoryService(state, policy)

    with pytest.raises(LookupError):
        service.adjust(uuid4(), "add", 1)
