"""BOM registry: which RM size/grade may become which FG size, and within what process envelope."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from wiremill.core.enums import BOMStatus, ItemCategory
from wiremill.core.exceptions import ConflictError, NotFoundError, ValidationError
from wiremill.models.bom import BOMRule
from wiremill.schemas.bom import BOMRuleCreate
from wiremill.services.lookups import require_item

logger = logging.getLogger(__name__)


def _active(db: Session):
    return db.query(BOMRule).filter(BOMRule.status == BOMStatus.ACTIVE.value)


def find_rule_for(db: Session, fg_size: str, grade: str, rm_size: Optional[str] = None) -> Optional[BOMRule]:
    """First Active rule for an FG size and grade, optionally pinned to an RM size."""
    query = _active(db).filter(BOMRule.fg_size == fg_size, BOMRule.grade == grade)
    if rm_size is not None:
        query = query.filter(BOMRule.rm_size == rm_size)
    return query.order_by(BOMRule.id).first()


def find_rules_for_rm(db: Session, rm_size: str) -> List[BOMRule]:
    """Every Active rule consuming `rm_size`: what this RM can become."""
    return _active(db).filter(BOMRule.rm_size == rm_size).order_by(BOMRule.fg_size, BOMRule.id).all()


def list_rules(db: Session, fg_size: Optional[str] = None) -> List[BOMRule]:
    if fg_size:
        query = _active(db).filter(BOMRule.fg_size == fg_size)
    else:
        query = db.query(BOMRule)
    return query.order_by(BOMRule.fg_size, BOMRule.rm_size).all()


def get_rule(db: Session, rule_id: int) -> BOMRule:
    rule = db.query(BOMRule).filter(BOMRule.id == rule_id).first()
    if not rule:
        raise NotFoundError("BOM", rule_id)
    return rule


def _check_ranges(data: BOMRuleCreate) -> None:
    if data.annealing_min > data.annealing_max:
        raise ValidationError("annealing_min", "Annealing minimum cannot be greater than maximum")
    if data.draw_pass_min > data.draw_pass_max:
        raise ValidationError("draw_pass_min", "Draw pass minimum cannot be greater than maximum")


def upsert(db: Session, data: BOMRuleCreate, rule_id: Optional[int] = None) -> BOMRule:
    """Create a rule (rule_id None) or replace an existing one.

    Raises:
        ValidationError: a min bound exceeds its max
        ConflictError: another rule already covers (fg_size, rm_size, grade)
        NotFoundError: rule_id does not exist
    """
    _check_ranges(data)
    rule = get_rule(db, rule_id) if rule_id is not None else None

    clash = db.query(BOMRule).filter(
        BOMRule.fg_size == data.fg_size,
        BOMRule.rm_size == data.rm_size,
        BOMRule.grade == data.grade,
    )
    if rule is not None:
        clash = clash.filter(BOMRule.id != rule.id)
    if clash.first():
        key = f"{data.fg_size}/{data.rm_size}/{data.grade}"
        raise ConflictError(key, message=f"BOM for FG {data.fg_size}, RM {data.rm_size}, grade {data.grade} already exists")

    if rule is None:
        rule = BOMRule()
        db.add(rule)
    for field, value in data.model_dump().items():
        setattr(rule, field, value.value if isinstance(value, BOMStatus) else value)
    db.commit()
    db.refresh(rule)
    logger.info(
        f"BOM {rule.id} saved: RM {rule.rm_size} -> FG {rule.fg_size} ({rule.grade}), "
        f"annealing [{rule.annealing_min}-{rule.annealing_max}], draw [{rule.draw_pass_min}-{rule.draw_pass_max}]"
    )
    return rule


def delete_rule(db: Session, rule_id: int) -> None:
    rule = get_rule(db, rule_id)
    db.delete(rule)
    db.commit()
    logger.info(f"BOM {rule_id} deleted")


def list_conversion_options(db: Session, rm_item_id: int) -> List[BOMRule]:
    rm_item = require_item(db, rm_item_id, ItemCategory.RM, "rm_item_id")
    return find_rules_for_rm(db, rm_item.size)


def resolve_conversion(db: Session, fg_item_id: int) -> Optional[BOMRule]:
    fg_item = require_item(db, fg_item_id, ItemCategory.FG, "fg_item_id")
    return find_rule_for(db, fg_item.size, fg_item.grade)
