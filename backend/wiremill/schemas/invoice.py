from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from wiremill.core.enums import SupplyType
from wiremill.services.charge_calculator import round_money


class InvoiceCreate(BaseModel):
    conversion_id: int
    invoice_date: Optional[datetime] = None
    supply_type: SupplyType = SupplyType.INTRA_STATE
    transport_charges: Decimal = Field(Decimal("0"), ge=0)
    tcs_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    irn_number: Optional[str] = None
    po_number: Optional[str] = None
    payment_term: str = "0 Days"
    supplier_code: str = "0"
    vehicle_number: Optional[str] = None
    e_way_bill_no: Optional[str] = None
    dispatched_through: str = "By Road"
    packing_type: str = "KGS"


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    conversion_id: int
    party_id: int
    finish_size_id: int
    original_size_id: int
    annealing_count: int
    draw_pass_count: int
    quantity: Decimal
    rate: Decimal
    annealing_charge: Decimal
    draw_charge: Decimal
    base_amount: Decimal
    gst_percentage: Decimal
    transport_charges: Decimal
    assessable_value: Decimal
    cgst_percentage: Decimal
    sgst_percentage: Decimal
    igst_percentage: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    gst_amount: Decimal
    tcs_percentage: Decimal
    tcs_amount: Decimal
    total_amount: Decimal
    invoice_date: datetime
    irn_number: Optional[str] = None
    po_number: Optional[str] = None
    payment_term: Optional[str] = None
    supplier_code: Optional[str] = None
    vehicle_number: Optional[str] = None
    e_way_bill_no: Optional[str] = None
    dispatched_through: Optional[str] = None
    packing_type: Optional[str] = None

    @field_serializer(
        "base_amount",
        "assessable_value",
        "cgst_amount",
        "sgst_amount",
        "igst_amount",
        "gst_amount",
        "tcs_amount",
        "total_amount",
    )
    def _money(self, value: Decimal) -> Decimal:
        return round_money(value)
