from sqlalchemy import Boolean, Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from wiremill.db.base import Base


class Item(Base):
    """Item master: one row per RM or FG size/grade/mill combination."""

    __tablename__ = "items"
    __table_args__ = (
        UniqueConstraint("category", "size", "grade", "mill", name="uq_item_identity"),
    )

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(2), nullable=False)  # RM | FG
    size = Column(String(64), nullable=False)  # e.g. "8mm"
    grade = Column(String(64), nullable=False)
    mill = Column(String(128), nullable=False)
    hsn_code = Column(String(16), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
