import pytest
from sqlalchemy.exc import OperationalError

from wiremill.core.enums import ItemCategory
from wiremill.core.exceptions import PartialFailureError
from wiremill.services.atomic import atomic_stock_operation


class BrokenSession:
    """Session whose commit and rollback both fail."""

    def commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    def rollback(self):
        raise OperationalError("ROLLBACK", {}, Exception("disk I/O error"))


def test_failed_rollback_reports_applied_steps():
    with pytest.raises(PartialFailureError) as exc_info:
        with atomic_stock_operation(BrokenSession(), "create_conversion", (ItemCategory.RM, 1)) as log:
            log.record("RM 1 -40")
            log.record("FG 2 +40")

    assert exc_info.value.operation == "create_conversion"
    assert exc_info.value.steps == ["RM 1 -40", "FG 2 +40"]
    assert exc_info.value.status_code == 500


def test_error_inside_block_rolls_back_and_propagates(db, masters):
    with pytest.raises(ValueError):
        with atomic_stock_operation(db, "noop", ("RM", masters["rm_item"].id)):
            masters["party"].address = "changed"
            db.flush()
            raise ValueError("boom")

    db.expire_all()
    assert masters["party"].address == "GIDC Vatva, Ahmedabad"


def test_locks_are_released_after_failure(db, masters):
    key = (ItemCategory.RM, masters["rm_item"].id)
    with pytest.raises(ValueError):
        with atomic_stock_operation(db, "first", key):
            raise ValueError("boom")

    with atomic_stock_operation(db, "second", key) as log:
        log.record("ok")
    assert log.steps == ["ok"]
