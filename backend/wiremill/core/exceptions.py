"""
Domain errors for the conversion core.

Every error carries a stable machine-readable `code`, the HTTP status the
API layer answers with, a human-readable message and structured details.
Storage-layer details and stack traces never reach the caller: anything
that is not a WiremillError is logged here and answered with a generic 500.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


class WiremillError(Exception):
    code = "error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": {key: _plain(value) for key, value in self.details.items()},
        }


class NotFoundError(WiremillError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} not found", entity=entity, id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class CategoryMismatchError(WiremillError):
    code = "category_mismatch"

    def __init__(self, expected: str, actual: str, item_id: Optional[int] = None):
        super().__init__(
            f"Item must be {expected}, got {actual}",
            expected=expected,
            actual=actual,
            item_id=item_id,
        )
        self.expected = expected
        self.actual = actual


class NoBOMRuleError(WiremillError):
    code = "no_bom_rule"
    status_code = 422

    def __init__(self, fg_size: str, rm_size: Optional[str], grade: str):
        super().__init__(
            f"No active BOM found for FG: {fg_size}, RM: {rm_size}, Grade: {grade}",
            fg_size=fg_size,
            rm_size=rm_size,
            grade=grade,
        )
        self.fg_size = fg_size
        self.rm_size = rm_size
        self.grade = grade


class ProcessRangeError(WiremillError):
    code = "process_out_of_range"
    status_code = 422

    def __init__(self, field: str, value: int, min_value: int, max_value: int):
        label = "Annealing count" if field == "annealing" else "Draw pass count"
        super().__init__(
            f"{label} {value} is outside allowed range [{min_value}-{max_value}]",
            field=field,
            value=value,
            min=min_value,
            max=max_value,
        )
        self.field = field
        self.value = value
        self.min = min_value
        self.max = max_value


class InsufficientStockError(WiremillError):
    code = "insufficient_stock"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, available: Decimal, required: Decimal, category: str = None, item_id: int = None):
        label = f"{category} stock" if category else "stock"
        super().__init__(
            f"Insufficient {label}. Available: {available}, Required: {required}",
            available=available,
            required=required,
            category=category,
            item_id=item_id,
        )
        self.available = available
        self.required = required


class ConflictError(WiremillError):
    code = "conflict"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, key: str, message: Optional[str] = None):
        super().__init__(message or f"Conflict on {key}", key=key)
        self.key = key


class DuplicateInvoiceError(ConflictError):
    code = "duplicate_invoice"

    def __init__(self, conversion_id: int):
        super().__init__(
            f"conversion_id={conversion_id}",
            message="Invoice already exists for this Outward Challan",
        )
        self.conversion_id = conversion_id


class ValidationError(WiremillError):
    code = "validation_error"

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}", field=field, reason=reason)
        self.field = field
        self.reason = reason


class StockInconsistencyError(WiremillError):
    """A reversal cannot be applied without driving stock negative."""

    code = "stock_inconsistency"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, category: str, item_id: int, available: Decimal, required: Decimal):
        super().__init__(
            f"Cannot reverse {required} of {category} item {item_id}: only {available} in stock",
            category=category,
            item_id=item_id,
            available=available,
            required=required,
        )
        self.available = available
        self.required = required


class NoGSTRateError(WiremillError):
    code = "no_gst_rate"
    status_code = 422

    def __init__(self, hsn_code: str):
        super().__init__(f"GST rate not found for HSN Code: {hsn_code}", hsn_code=hsn_code)
        self.hsn_code = hsn_code


class DataIntegrityError(WiremillError):
    """Persisted data is malformed; needs an operator, never auto-repaired."""

    code = "data_integrity"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, entity: str, entity_id: Any, reason: str):
        super().__init__(
            f"{entity} {entity_id} has invalid data: {reason}",
            entity=entity,
            id=entity_id,
            reason=reason,
        )


class PartialFailureError(WiremillError):
    """A stock operation failed midway and could not be rolled back."""

    code = "partial_failure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, steps: List[str]):
        super().__init__(
            f"{operation} partially applied; manual reconciliation required",
            operation=operation,
            steps=list(steps),
        )
        self.operation = operation
        self.steps = list(steps)


async def wiremill_error_handler(request: Request, exc: WiremillError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message} {exc.details}")
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.code} - {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Generic 500 - logs the actual error, hides it from the caller."""
    logger.error(
        f"Internal server error: {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "internal_error",
            "message": "An internal error occurred. Please try again later.",
            "details": {},
        },
    )
