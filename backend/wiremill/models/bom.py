"""
BOMRule: one legal RM -> FG conversion path with its process envelope.
Annealing bounds live in 0-7, draw pass bounds in 0-10, min <= max.
"""
from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from wiremill.db.base import Base


class BOMRule(Base):
    __tablename__ = "bom_rules"
    __table_args__ = (
        UniqueConstraint("fg_size", "rm_size", "grade", name="uq_bom_conversion"),
        CheckConstraint("annealing_min <= annealing_max", name="ck_bom_annealing_range"),
        CheckConstraint("draw_pass_min <= draw_pass_max", name="ck_bom_draw_pass_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    fg_size = Column(String(64), nullable=False, index=True)
    rm_size = Column(String(64), nullable=False, index=True)
    grade = Column(String(64), nullable=False)
    annealing_min = Column(Integer, nullable=False, default=0)
    annealing_max = Column(Integer, nullable=False, default=7)
    draw_pass_min = Column(Integer, nullable=False, default=0)
    draw_pass_max = Column(Integer, nullable=False, default=10)
    status = Column(String(16), nullable=False, default="Active")  # Active | Inactive
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
