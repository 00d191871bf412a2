"""
Transaction boundary for operations that touch more than one stock entry.

    with atomic_stock_operation(db, "create_conversion", (RM, rm_id), (FG, fg_id)) as log:
        ...validate, then mutate...
        log.record("RM 12 -40")

Holds the per-item locks for the whole operation, commits once at the end
and rolls the session back on any error. If the rollback itself fails the
caller gets PartialFailureError listing the steps that were applied.
"""
import logging
from contextlib import contextmanager
from typing import Hashable, Iterator, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wiremill.core.exceptions import PartialFailureError
from wiremill.core.locks import stock_locks

logger = logging.getLogger(__name__)


class StockMovementLog:
    def __init__(self, operation: str):
        self.operation = operation
        self.steps: List[str] = []

    def record(self, step: str) -> None:
        self.steps.append(step)


@contextmanager
def atomic_stock_operation(db: Session, operation: str, *stock_keys: Hashable) -> Iterator[StockMovementLog]:
    log = StockMovementLog(operation)
    keys = [(str(getattr(category, "value", category)), item_id) for category, item_id in stock_keys]
    with stock_locks.hold(*keys):
        try:
            yield log
            db.commit()
        except Exception as exc:
            if log.steps:
                logger.warning(f"{operation} failed after {log.steps}; rolling back: {exc}")
            try:
                db.rollback()
            except SQLAlchemyError as rollback_error:
                logger.error(
                    f"Rollback failed for {operation}; applied steps: {log.steps}",
                    exc_info=True,
                )
                raise PartialFailureError(operation, log.steps) from rollback_error
            raise
    if log.steps:
        logger.info(f"{operation} committed: {'; '.join(log.steps)}")
