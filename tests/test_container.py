"""Tests for container wiring."""

from farm_metrics.config import Settings
from farm_metrics.containers import build_container
from farm_metrics.domain.state import FarmState


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.farm_service is not None
    assert container.state.egg_settings.egg_count == 5000
    assert container.policy.days_sentinel == 999


def test_build_container_registers_extra_nutrients() -> None:
    settings = Settings(admin_token="admin-token", extra_nutrients="Vitamin D,Zinc")

    container = build_container(settings)

    assert "vitamin_d" in container.state.nutrients.keys()
    assert container.state.nutrients.label("zinc") == "Zinc"


def test_replace_state_rebuilds_services(container) -> None:
    restored = FarmState(current_month=7)

    container.replace_state(restored)

    assert container.state is restored
    assert container.farm_service.catalog.state is restored
    assert restored.last_sync is not None
