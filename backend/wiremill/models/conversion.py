"""
ConversionTransaction (outward challan): converts RM stock into FG stock.
Lifecycle: created -> (edited)* -> deleted. Charges are snapshotted from the
party at creation and never re-read.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from wiremill.db.base import Base


class ConversionTransaction(Base):
    __tablename__ = "conversion_transactions"

    id = Column(Integer, primary_key=True, index=True)
    challan_number = Column(String(32), nullable=False, unique=True)
    party_id = Column(Integer, ForeignKey("parties.id", ondelete="RESTRICT"), nullable=False, index=True)
    finish_size_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False)  # FG
    original_size_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False)  # RM
    annealing_count = Column(Integer, nullable=False)
    draw_pass_count = Column(Integer, nullable=False)
    quantity = Column(Numeric(18, 6), nullable=False)
    rate = Column(Numeric(18, 6), nullable=False)
    annealing_charge = Column(Numeric(12, 4), nullable=False, default=0)
    draw_charge = Column(Numeric(12, 4), nullable=False, default=0)
    total_amount = Column(Numeric(18, 6), nullable=False)
    challan_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    party = relationship("Party")
    finish_size = relationship("Item", foreign_keys=[finish_size_id])
    original_size = relationship("Item", foreign_keys=[original_size_id])
