from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReceiptCreate(BaseModel):
    sending_party_id: int
    party_challan_number: str = Field(..., min_length=1, max_length=64)
    rm_item_id: int
    quantity: Decimal = Field(..., gt=0)
    rate: Decimal = Field(..., ge=0)
    grn_date: Optional[datetime] = None


class ReceiptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sending_party_id: int
    party_challan_number: str
    rm_item_id: int
    quantity: Decimal
    rate: Decimal
    total_value: Decimal
    grn_date: datetime
