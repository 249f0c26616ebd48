"""Dependency container wiring for the application."""

from dataclasses import dataclass

from farm_metrics.config import Settings, parse_nutrient_labels
from farm_metrics.domain.models import EggSettings
from farm_metrics.domain.state import FarmState
from farm_metrics.services.catalog import CatalogService
from farm_metrics.services.dashboard import FarmService
from farm_metrics.services.flocks import FlockService
from farm_metrics.services.inventory import InventoryService, StockPolicy
from farm_metrics.services.notifications import NotificationService
from farm_metrics.services.purchases import PurchaseService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    policy: StockPolicy
    farm_service: FarmService

    @property
    def state(self) -> FarmState:
        return self.farm_service.state

    def replace_state(self, state: FarmState) -> None:
        """Swap in a restored state, rebuilding the services around it."""
        self.farm_service = build_farm_service(self.settings, self.policy, state)
        self.farm_service.sync()


def build_policy(settings: Settings) -> StockPolicy:
    return StockPolicy(
        critical_ratio=settings.critical_stock_ratio,
        warning_ratio=settings.warning_stock_ratio,
        days_sentinel=settings.days_remaining_sentinel,
    )


def build_farm_service(
    settings: Settings, policy: StockPolicy, state: FarmState
) -> FarmService:
    """Create the dashboard facade around a state."""
    return FarmService(
        state=state,
        catalog=CatalogService(state),
        purchases=PurchaseService(state),
        inventory=InventoryService(state, policy),
        notifications=NotificationService(state, limit=settings.notification_limit),
        flocks=FlockService(state),
    )


def build_container(
    settings: Settings | None = None, state: FarmState | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    policy = build_policy(resolved_settings)
    resolved_state = state if state is not None else FarmState(
        egg_settings=EggSettings(
            egg_count=resolved_settings.default_egg_count,
            egg_price=resolved_settings.default_egg_price,
        )
    )
    farm_service = build_farm_service(resolved_settings, policy, resolved_state)
    for label in parse_nutrient_labels(resolved_settings.extra_nutrients):
        farm_service.catalog.add_nutrient(label)
    return AppContainer(
        settings=resolved_settings,
        policy=policy,
        farm_service=farm_service,
    )
