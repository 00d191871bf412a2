import pytest

from wiremill.core.exceptions import NoBOMRuleError, ProcessRangeError
from wiremill.models import BOMRule
from wiremill.services.process_validator import validate


@pytest.fixture
def rule(db):
    rule = BOMRule(
        fg_size="6mm",
        rm_size="8mm",
        grade="MS",
        annealing_min=2,
        annealing_max=5,
        draw_pass_min=1,
        draw_pass_max=4,
    )
    db.add(rule)
    db.commit()
    return rule


@pytest.mark.parametrize("annealing", [2, 3, 4, 5])
def test_annealing_inside_range_passes(db, rule, annealing):
    assert validate(db, "6mm", "8mm", "MS", annealing, 2).id == rule.id


@pytest.mark.parametrize("annealing", [1, 6])
def test_annealing_outside_range_fails(db, rule, annealing):
    with pytest.raises(ProcessRangeError) as exc_info:
        validate(db, "6mm", "8mm", "MS", annealing, 2)

    error = exc_info.value
    assert error.field == "annealing"
    assert error.value == annealing
    assert (error.min, error.max) == (2, 5)


@pytest.mark.parametrize("draw", [0, 5])
def test_draw_pass_outside_range_fails(db, rule, draw):
    with pytest.raises(ProcessRangeError) as exc_info:
        validate(db, "6mm", "8mm", "MS", 3, draw)
    assert exc_info.value.field == "draw_pass"


def test_unknown_conversion(db, rule):
    with pytest.raises(NoBOMRuleError) as exc_info:
        validate(db, "6mm", "6.5mm", "MS", 3, 2)
    assert exc_info.value.rm_size == "6.5mm"

    with pytest.raises(NoBOMRuleError):
        validate(db, "6mm", "8mm", "EN8", 3, 2)


def test_inactive_rule_is_not_a_rule(db, rule):
    rule.status = "Inactive"
    db.commit()

    with pytest.raises(NoBOMRuleError):
        validate(db, "6mm", "8mm", "MS", 3, 2)
