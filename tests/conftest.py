"""Shared test fixtures."""

from datetime import UTC, date, datetime

import pytest

from farm_metrics.config import Settings
from farm_metrics.containers import AppContainer, build_container
from farm_metrics.domain.models import Feed, InventoryItem, Purchase
from farm_metrics.domain.state import FarmState
from farm_metrics.services.dashboard import FarmService
from farm_metrics.services.inventory import StockPolicy

THIS_YEAR = datetime.now(tz=UTC).year

LAYER_MASH_NUTRIENTS = {
    "protein": 18,
    "fat": 4,
    "fiber": 8,
    "calcium": 1,
    "umami": 2.5,
    "amino": 14,
}

HAY_NUTRIENTS = {
    "protein": 12,
    "fat": 2,
    "fiber": 22,
    "calcium": 0.5,
    "umami": 1.2,
    "amino": 9,
}


def in_month(month: int, day: int = 15, year: int = THIS_YEAR) -> date:
    """Return a date inside a month of the current year."""
    return date(year, month, day)


def add_mash_and_hay(service: FarmService) -> tuple[Feed, Feed]:
    """Register the two feeds most tests buy."""
    mash = service.catalog.add_feed("Layer mash", 5000, "kg", LAYER_MASH_NUTRIENTS)
    hay = service.catalog.add_feed("Hay", 3000, "kg", HAY_NUTRIENTS)
    return mash, hay


def add_soy_stock(service: FarmService) -> InventoryItem:
    """Add an inventory item comfortably above its minimum level."""
    return service.inventory.add_item(
        name="Soybean meal",
        current_stock=2800,
        min_level=1000,
        optimal_level=3000,
        unit="kg",
        daily_usage=250,
    )


def buy(
    service: FarmService, feed: Feed, quantity: float, ratio: float, month: int
) -> Purchase:
    return service.purchases.add_purchase(feed.id, quantity, ratio, in_month(month))


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token="admin-token")


@pytest.fixture
def policy() -> StockPolicy:
    return StockPolicy()


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def farm_service(container: AppContainer) -> FarmService:
    container.farm_service.set_month(3)
    return container.farm_service


@pytest.fixture
def state(farm_service: FarmService) -> FarmState:
    return farm_service.state
