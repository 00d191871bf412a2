from sqlalchemy import Boolean, Column, Integer, Numeric, String

from wiremill.db.base import Base


class GSTRate(Base):
    __tablename__ = "gst_rates"

    id = Column(Integer, primary_key=True, index=True)
    hsn_code = Column(String(16), nullable=False, unique=True)
    gst_percentage = Column(Numeric(5, 2), nullable=False)  # 0-100
    is_active = Column(Boolean, default=True, nullable=False)
