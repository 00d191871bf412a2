from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from wiremill.core.enums import ANNEALING_COUNT_MAX, DRAW_PASS_COUNT_MAX, BOMStatus


class BOMRuleCreate(BaseModel):
    fg_size: str = Field(..., min_length=1, max_length=64)
    rm_size: str = Field(..., min_length=1, max_length=64)
    grade: str = Field(..., min_length=1, max_length=64)
    annealing_min: int = Field(0, ge=0, le=ANNEALING_COUNT_MAX)
    annealing_max: int = Field(ANNEALING_COUNT_MAX, ge=0, le=ANNEALING_COUNT_MAX)
    draw_pass_min: int = Field(0, ge=0, le=DRAW_PASS_COUNT_MAX)
    draw_pass_max: int = Field(DRAW_PASS_COUNT_MAX, ge=0, le=DRAW_PASS_COUNT_MAX)
    status: BOMStatus = BOMStatus.ACTIVE


class BOMRuleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fg_size: str
    rm_size: str
    grade: str
    annealing_min: int
    annealing_max: int
    draw_pass_min: int
    draw_pass_max: int
    status: str
    created_at: Optional[datetime] = None
