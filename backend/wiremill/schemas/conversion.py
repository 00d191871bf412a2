from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from wiremill.core.enums import ANNEALING_COUNT_MAX, DRAW_PASS_COUNT_MAX
from wiremill.services.charge_calculator import round_money


class ConversionCreate(BaseModel):
    party_id: int
    finish_size_id: int  # FG item
    original_size_id: int  # RM item
    annealing_count: int = Field(..., ge=0, le=ANNEALING_COUNT_MAX)
    draw_pass_count: int = Field(..., ge=0, le=DRAW_PASS_COUNT_MAX)
    quantity: Decimal = Field(..., gt=0)
    rate: Decimal = Field(..., ge=0)
    challan_date: Optional[datetime] = None


class ConversionUpdate(BaseModel):
    """Editable fields of an existing challan. Items and party are fixed."""

    annealing_count: Optional[int] = Field(None, ge=0, le=ANNEALING_COUNT_MAX)
    draw_pass_count: Optional[int] = Field(None, ge=0, le=DRAW_PASS_COUNT_MAX)
    quantity: Optional[Decimal] = Field(None, gt=0)
    rate: Optional[Decimal] = Field(None, ge=0)
    challan_date: Optional[datetime] = None


class ConversionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    challan_number: str
    party_id: int
    finish_size_id: int
    original_size_id: int
    annealing_count: int
    draw_pass_count: int
    quantity: Decimal
    rate: Decimal
    annealing_charge: Decimal
    draw_charge: Decimal
    total_amount: Decimal
    challan_date: datetime

    @field_serializer("total_amount")
    def _money(self, value: Decimal) -> Decimal:
        return round_money(value)


class ReversalSummary(BaseModel):
    challan_number: str
    quantity: Decimal
    rm_item_id: int
    rm_quantity: Decimal
    fg_item_id: int
    fg_quantity: Decimal
