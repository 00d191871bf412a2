"""
Outward conversion workflow (outward challans).

Lifecycle of a ConversionTransaction: none -> created -> (edited)* -> deleted.

CREATE requires the party, an FG item, an RM item, an Active BOM rule whose
envelope admits the process counts, and enough RM stock. RM stock goes down
by the quantity and FG stock goes up by the same amount.

UPDATE applies only the quantity delta to both entries. Process counts are
re-checked against the BOM whenever they change; the annealing/draw charges
stay the ones snapshotted from the party at creation.

An invoiced challan can be neither edited nor deleted (ConflictError) until
its invoice is deleted.

DELETE reverses the original movement. If the FG produced has since left
stock the reversal is refused (StockInconsistencyError), never clamped.

Every check runs before the first write and against the challan row as
re-read under the item locks; the writes of one operation commit together
or not at all (see services.atomic).
"""
import logging
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from wiremill.core.config import settings
from wiremill.core.enums import ItemCategory
from wiremill.core.exceptions import (
    ConflictError,
    DataIntegrityError,
    InsufficientStockError,
    NotFoundError,
    StockInconsistencyError,
)
from wiremill.models.conversion import ConversionTransaction
from wiremill.models.invoice import TaxInvoice
from wiremill.schemas.conversion import ConversionCreate, ConversionUpdate, ReversalSummary
from wiremill.services import charge_calculator, process_validator, stock_ledger
from wiremill.services.atomic import atomic_stock_operation
from wiremill.services.charge_calculator import to_decimal
from wiremill.services.lookups import get_item, require_item, require_party
from wiremill.services.numbering import next_number

logger = logging.getLogger(__name__)

RM = ItemCategory.RM
FG = ItemCategory.FG


def get_conversion(db: Session, conversion_id: int) -> ConversionTransaction:
    conversion = db.query(ConversionTransaction).filter(ConversionTransaction.id == conversion_id).first()
    if not conversion:
        raise NotFoundError("Outward Challan", conversion_id)
    return conversion


def list_conversions(db: Session) -> List[ConversionTransaction]:
    return (
        db.query(ConversionTransaction)
        .order_by(ConversionTransaction.challan_date.desc(), ConversionTransaction.id.desc())
        .all()
    )


def _total(quantity, rate, annealing_charge, draw_charge, annealing_count, draw_pass_count) -> Decimal:
    return charge_calculator.compute(
        quantity, rate, annealing_charge, draw_charge, annealing_count, draw_pass_count
    ).total


def create_conversion(db: Session, data: ConversionCreate) -> ConversionTransaction:
    party = require_party(db, data.party_id)
    fg_item = require_item(db, data.finish_size_id, FG, "finish_size_id")
    rm_item = require_item(db, data.original_size_id, RM, "original_size_id")

    rule = process_validator.validate(
        db, fg_item.size, rm_item.size, fg_item.grade, data.annealing_count, data.draw_pass_count
    )
    quantity = to_decimal(data.quantity)

    with atomic_stock_operation(db, "create_conversion", (RM, rm_item.id), (FG, fg_item.id)) as log:
        available = stock_ledger.get_quantity(db, RM, rm_item.id)
        if available < quantity:
            raise InsufficientStockError(available, quantity, category=RM.value, item_id=rm_item.id)

        # Charges are fixed now; later party edits don't touch this challan
        annealing_charge = to_decimal(party.annealing_charge)
        draw_charge = to_decimal(party.draw_charge)

        conversion = ConversionTransaction(
            challan_number=next_number(db, settings.CHALLAN_PREFIX),
            party_id=party.id,
            finish_size_id=fg_item.id,
            original_size_id=rm_item.id,
            annealing_count=data.annealing_count,
            draw_pass_count=data.draw_pass_count,
            quantity=quantity,
            rate=to_decimal(data.rate),
            annealing_charge=annealing_charge,
            draw_charge=draw_charge,
            total_amount=_total(
                quantity, data.rate, annealing_charge, draw_charge, data.annealing_count, data.draw_pass_count
            ),
        )
        if data.challan_date is not None:
            conversion.challan_date = data.challan_date
        db.add(conversion)
        db.flush()

        stock_ledger.decrease(db, RM, rm_item.id, quantity)
        log.record(f"RM {rm_item.id} -{quantity}")
        stock_ledger.increase(db, FG, fg_item.id, quantity)
        log.record(f"FG {fg_item.id} +{quantity}")

    db.refresh(conversion)
    logger.info(
        f"Challan {conversion.challan_number} created under BOM {rule.id}: "
        f"{quantity} of RM {rm_item.size} -> FG {fg_item.size} ({fg_item.grade}), total {conversion.total_amount}"
    )
    return conversion


def _lock_conversion(db: Session, conversion_id: int) -> ConversionTransaction:
    """Re-read the challan row under lock; it may have changed since it was first loaded."""
    conversion = (
        db.query(ConversionTransaction)
        .filter(ConversionTransaction.id == conversion_id)
        .populate_existing()
        .with_for_update()
        .first()
    )
    if not conversion:
        raise NotFoundError("Outward Challan", conversion_id)
    return conversion


def _refuse_if_invoiced(db: Session, conversion: ConversionTransaction, action: str) -> None:
    invoiced = db.query(TaxInvoice).filter(TaxInvoice.conversion_id == conversion.id).first()
    if invoiced:
        raise ConflictError(
            f"conversion_id={conversion.id}",
            message=f"Challan {conversion.challan_number} is invoiced as {invoiced.invoice_number}; "
            f"delete the invoice before {action} it",
        )


def update_conversion(db: Session, conversion_id: int, data: ConversionUpdate) -> ConversionTransaction:
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    # Item ids never change, so the first read is enough to pick the locks
    loaded = get_conversion(db, conversion_id)
    rm_id = loaded.original_size_id
    fg_id = loaded.finish_size_id

    with atomic_stock_operation(db, "update_conversion", (RM, rm_id), (FG, fg_id)) as log:
        conversion = _lock_conversion(db, conversion_id)
        _refuse_if_invoiced(db, conversion, "editing")

        annealing_count = changes.get("annealing_count", conversion.annealing_count)
        draw_pass_count = changes.get("draw_pass_count", conversion.draw_pass_count)
        quantity = to_decimal(changes.get("quantity", conversion.quantity))
        rate = to_decimal(changes.get("rate", conversion.rate))

        if annealing_count != conversion.annealing_count or draw_pass_count != conversion.draw_pass_count:
            fg_item = get_item(db, fg_id)
            rm_item = get_item(db, rm_id)
            if fg_item is None or rm_item is None:
                raise DataIntegrityError("Outward Challan", conversion.id, "finish/original size item is missing")
            process_validator.validate(db, fg_item.size, rm_item.size, fg_item.grade, annealing_count, draw_pass_count)

        delta = quantity - to_decimal(conversion.quantity)
        if delta != 0:
            rm_available = stock_ledger.get_quantity(db, RM, rm_id)
            if rm_available < delta:
                raise InsufficientStockError(rm_available, delta, category=RM.value, item_id=rm_id)
            fg_available = stock_ledger.get_quantity(db, FG, fg_id)
            if fg_available + delta < 0:
                raise InsufficientStockError(fg_available, -delta, category=FG.value, item_id=fg_id)

            stock_ledger.adjust(db, RM, rm_id, -delta)
            log.record(f"RM {rm_id} {-delta:+}")
            stock_ledger.adjust(db, FG, fg_id, delta)
            log.record(f"FG {fg_id} {delta:+}")

        conversion.annealing_count = annealing_count
        conversion.draw_pass_count = draw_pass_count
        conversion.quantity = quantity
        conversion.rate = rate
        if "challan_date" in changes:
            conversion.challan_date = changes["challan_date"]
        conversion.total_amount = _total(
            quantity, rate, conversion.annealing_charge, conversion.draw_charge, annealing_count, draw_pass_count
        )
        db.flush()

    db.refresh(conversion)
    logger.info(f"Challan {conversion.challan_number} updated (quantity delta {delta:+}), total {conversion.total_amount}")
    return conversion


def delete_conversion(db: Session, conversion_id: int) -> ReversalSummary:
    loaded = get_conversion(db, conversion_id)
    rm_id = loaded.original_size_id
    fg_id = loaded.finish_size_id

    with atomic_stock_operation(db, "delete_conversion", (RM, rm_id), (FG, fg_id)) as log:
        conversion = _lock_conversion(db, conversion_id)
        _refuse_if_invoiced(db, conversion, "deleting")
        quantity = to_decimal(conversion.quantity)
        challan_number = conversion.challan_number

        fg_available = stock_ledger.get_quantity(db, FG, fg_id)
        if fg_available < quantity:
            raise StockInconsistencyError(FG.value, fg_id, fg_available, quantity)

        rm_entry = stock_ledger.increase(db, RM, rm_id, quantity)
        log.record(f"RM {rm_id} +{quantity}")
        fg_entry = stock_ledger.decrease(db, FG, fg_id, quantity)
        log.record(f"FG {fg_id} -{quantity}")
        db.delete(conversion)
        db.flush()

        summary = ReversalSummary(
            challan_number=challan_number,
            quantity=quantity,
            rm_item_id=rm_id,
            rm_quantity=to_decimal(rm_entry.quantity),
            fg_item_id=fg_id,
            fg_quantity=to_decimal(fg_entry.quantity),
        )

    logger.info(f"Challan {challan_number} deleted; {quantity} returned from FG {fg_id} to RM {rm_id}")
    return summary
