"""Feed purchase records."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID, uuid4

from farm_metrics.domain.models import Purchase
from farm_metrics.domain.state import FarmState
from farm_metrics.services.metrics import monthly_purchases

MAX_FEEDING_RATIO = 100


@dataclass
class PurchaseService:
    """Records and removes feed purchases."""

    state: FarmState

    def add_purchase(
        self,
        feed_id: UUID,
        quantity: float,
        feeding_ratio: float,
        purchase_date: date,
    ) -> Purchase:
        """Record a purchase of an existing feed."""
        if self.state.find_feed(feed_id) is None:
            msg = f"Feed {feed_id} not found"
            raise ValueError(msg)
        if quantity < 0:
            msg = "Quantity must not be negative"
            raise ValueError(msg)
        if not 0 <= feeding_ratio <= MAX_FEEDING_RATIO:
            msg = "Feeding ratio must be between 0 and 100"
            raise ValueError(msg)
        purchase = Purchase(
            id=uuid4(),
            feed_id=feed_id,
            quantity=float(quantity),
            feeding_ratio=float(feeding_ratio),
            purchase_date=purchase_date,
        )
        self.state.purchases.append(purchase)
        return purchase

    def delete_purchase(self, purchase_id: UUID) -> bool:
        """Delete a purchase; return False if it does not exist."""
        remaining = [p for p in self.state.purchases if p.id != purchase_id]
        deleted = len(remaining) != len(self.state.purchases)
        self.state.purchases = remaining
        return deleted

    def list_purchases(
        self, month: int | None = None, year: int | None = None
    ) -> list[Purchase]:
        """Return all purchases, or those of one month, oldest first."""
        purchases = (
            self.state.purchases
            if month is None
            else monthly_purchases(self.state, month, year)
        )
        return sorted(purchases, key=lambda purchase: purchase.purchase_date)
