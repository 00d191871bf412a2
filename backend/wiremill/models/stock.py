from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from wiremill.db.base import Base


class StockEntry(Base):
    """Running quantity per (category, item). Never negative."""

    __tablename__ = "stock_entries"
    __table_args__ = (
        UniqueConstraint("category", "item_id", name="uq_stock_category_item"),
        CheckConstraint("quantity >= 0", name="ck_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(2), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="RESTRICT"), nullable=False)
    quantity = Column(Numeric(18, 6), nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True), server_default=func.now())

    item = relationship("Item")
