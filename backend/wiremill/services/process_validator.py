"""Check a proposed RM -> FG conversion against the BOM registry."""
from sqlalchemy.orm import Session

from wiremill.core.exceptions import NoBOMRuleError, ProcessRangeError
from wiremill.models.bom import BOMRule
from wiremill.services.bom_registry import find_rule_for


def validate(
    db: Session,
    fg_size: str,
    rm_size: str,
    grade: str,
    annealing_count: int,
    draw_pass_count: int,
) -> BOMRule:
    """Return the Active rule allowing this conversion.

    Raises:
        NoBOMRuleError: no Active rule for (fg_size, rm_size, grade)
        ProcessRangeError: a count falls outside the rule's [min, max]
    """
    rule = find_rule_for(db, fg_size, grade, rm_size=rm_size)
    if rule is None:
        raise NoBOMRuleError(fg_size, rm_size, grade)

    if not rule.annealing_min <= annealing_count <= rule.annealing_max:
        raise ProcessRangeError("annealing", annealing_count, rule.annealing_min, rule.annealing_max)
    if not rule.draw_pass_min <= draw_pass_count <= rule.draw_pass_max:
        raise ProcessRangeError("draw_pass", draw_pass_count, rule.draw_pass_min, rule.draw_pass_max)
    return rule
