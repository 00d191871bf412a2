"""Stock ledger: running quantity per (category, item), never negative.

The ledger doesn't know why stock moves. Mutations flush but never commit;
the caller owns the transaction. A rejected mutation leaves the entry as it was.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from wiremill.core.enums import ItemCategory
from wiremill.core.exceptions import InsufficientStockError, ValidationError
from wiremill.models.stock import StockEntry
from wiremill.services.charge_calculator import Number, to_decimal

logger = logging.getLogger(__name__)


def _category(category) -> str:
    return ItemCategory(category).value


def _get_entry(db: Session, category, item_id: int, for_update: bool = False) -> Optional[StockEntry]:
    # Re-read the row, never the identity-map copy
    query = db.query(StockEntry).filter(
        StockEntry.category == _category(category),
        StockEntry.item_id == item_id,
    ).populate_existing()
    if for_update:
        query = query.with_for_update()
    return query.first()


def get_quantity(db: Session, category, item_id: int) -> Decimal:
    entry = _get_entry(db, category, item_id)
    return to_decimal(entry.quantity) if entry else Decimal("0")


def list_stock(db: Session, category: Optional[str] = None) -> List[StockEntry]:
    query = db.query(StockEntry)
    if category:
        query = query.filter(StockEntry.category == _category(category))
    return query.order_by(StockEntry.category, StockEntry.last_updated.desc()).all()


def adjust(db: Session, category, item_id: int, delta: Number) -> Optional[StockEntry]:
    """Apply a signed delta. Fails with InsufficientStockError below zero."""
    delta = to_decimal(delta)
    entry = _get_entry(db, category, item_id, for_update=True)
    current = to_decimal(entry.quantity) if entry else Decimal("0")
    new_quantity = current + delta
    if new_quantity < 0:
        raise InsufficientStockError(current, -delta, category=_category(category), item_id=item_id)
    if delta == 0:
        return entry

    if entry is None:
        entry = StockEntry(category=_category(category), item_id=item_id, quantity=Decimal("0"))
        db.add(entry)
    entry.quantity = new_quantity
    entry.last_updated = datetime.now(timezone.utc)
    db.flush()
    logger.debug(f"Stock {_category(category)}/{item_id}: {current} -> {new_quantity} ({delta:+})")
    return entry


def increase(db: Session, category, item_id: int, amount: Number) -> StockEntry:
    """Add stock, creating the entry on first movement. Negative amounts behave like adjust()."""
    amount = to_decimal(amount)
    if amount == 0:
        raise ValidationError("amount", "Stock increase must be non-zero")
    return adjust(db, category, item_id, amount)


def decrease(db: Session, category, item_id: int, amount: Number) -> StockEntry:
    amount = to_decimal(amount)
    if amount <= 0:
        raise ValidationError("amount", "Stock decrease must be greater than 0")
    return adjust(db, category, item_id, -amount)
