from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from wiremill.db.base import Base


class Party(Base):
    __tablename__ = "parties"

    id = Column(Integer, primary_key=True, index=True)
    party_name = Column(String(255), nullable=False, unique=True)
    address = Column(String(512), nullable=False, default="")
    gst_number = Column(String(15), nullable=True, index=True)
    contact_number = Column(String(32), nullable=True)
    # Per-unit processing charges, copied onto each challan when it is created
    annealing_charge = Column(Numeric(12, 4), nullable=False, default=0)
    draw_charge = Column(Numeric(12, 4), nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
