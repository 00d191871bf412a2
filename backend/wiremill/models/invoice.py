from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from wiremill.db.base import Base


class TaxInvoice(Base):
    """Derived 1:1 from a conversion transaction. Immutable once created."""

    __tablename__ = "tax_invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(32), nullable=False, unique=True)
    conversion_id = Column(
        Integer, ForeignKey("conversion_transactions.id", ondelete="RESTRICT"), nullable=False, unique=True
    )
    party_id = Column(Integer, ForeignKey("parties.id", ondelete="RESTRICT"), nullable=False, index=True)
    finish_size_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False)
    original_size_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False)

    # Copied from the challan
    annealing_count = Column(Integer, nullable=False)
    draw_pass_count = Column(Integer, nullable=False)
    quantity = Column(Numeric(18, 6), nullable=False)
    rate = Column(Numeric(18, 6), nullable=False)
    annealing_charge = Column(Numeric(12, 4), nullable=False)
    draw_charge = Column(Numeric(12, 4), nullable=False)

    # Tax computation
    base_amount = Column(Numeric(18, 6), nullable=False)
    gst_percentage = Column(Numeric(5, 2), nullable=False)
    transport_charges = Column(Numeric(18, 6), nullable=False, default=0)
    assessable_value = Column(Numeric(18, 6), nullable=False)
    cgst_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    sgst_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    igst_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    cgst_amount = Column(Numeric(18, 6), nullable=False, default=0)
    sgst_amount = Column(Numeric(18, 6), nullable=False, default=0)
    igst_amount = Column(Numeric(18, 6), nullable=False, default=0)
    gst_amount = Column(Numeric(18, 6), nullable=False)
    tcs_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    tcs_amount = Column(Numeric(18, 6), nullable=False, default=0)
    total_amount = Column(Numeric(18, 6), nullable=False)
    invoice_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Dispatch details printed on the invoice
    irn_number = Column(String(128), nullable=True)
    po_number = Column(String(64), nullable=True)
    payment_term = Column(String(32), default="0 Days")
    supplier_code = Column(String(32), default="0")
    vehicle_number = Column(String(32), nullable=True)
    e_way_bill_no = Column(String(64), nullable=True)
    dispatched_through = Column(String(64), default="By Road")
    packing_type = Column(String(16), default="KGS")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    conversion = relationship("ConversionTransaction")
    party = relationship("Party")
    finish_size = relationship("Item", foreign_keys=[finish_size_id])
    original_size = relationship("Item", foreign_keys=[original_size_id])
