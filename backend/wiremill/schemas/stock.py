from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StockRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category: str
    item_id: int
    size: Optional[str] = None
    grade: Optional[str] = None
    quantity: Decimal
    last_updated: Optional[datetime] = None


class StockLevel(BaseModel):
    category: str
    item_id: int
    quantity: Decimal
