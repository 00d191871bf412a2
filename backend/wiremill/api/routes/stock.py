"""Read-only stock levels."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from wiremill.api.deps import get_db
from wiremill.core.enums import ItemCategory
from wiremill.schemas.stock import StockLevel, StockRecord
from wiremill.services import stock_ledger

router = APIRouter()


@router.get("", response_model=List[StockRecord])
def list_stock(category: Optional[ItemCategory] = Query(None), db: Session = Depends(get_db)):
    entries = stock_ledger.list_stock(db, category=category)
    return [
        StockRecord(
            id=entry.id,
            category=entry.category,
            item_id=entry.item_id,
            size=entry.item.size if entry.item else None,
            grade=entry.item.grade if entry.item else None,
            quantity=entry.quantity,
            last_updated=entry.last_updated,
        )
        for entry in entries
    ]


@router.get("/{category}/{item_id}", response_model=StockLevel)
def stock_level(category: ItemCategory, item_id: int, db: Session = Depends(get_db)):
    return StockLevel(
        category=category.value,
        item_id=item_id,
        quantity=stock_ledger.get_quantity(db, category, item_id),
    )
