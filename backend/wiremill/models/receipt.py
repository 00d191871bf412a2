from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from wiremill.db.base import Base


class GoodsReceipt(Base):
    """GRN: raw material received from a party. Increases RM stock."""

    __tablename__ = "goods_receipts"

    id = Column(Integer, primary_key=True, index=True)
    sending_party_id = Column(Integer, ForeignKey("parties.id", ondelete="RESTRICT"), nullable=False, index=True)
    party_challan_number = Column(String(64), nullable=False)
    rm_item_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity = Column(Numeric(18, 6), nullable=False)
    rate = Column(Numeric(18, 6), nullable=False)
    total_value = Column(Numeric(18, 6), nullable=False)
    grn_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    sending_party = relationship("Party")
    rm_item = relationship("Item")
