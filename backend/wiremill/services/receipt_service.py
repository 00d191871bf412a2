"""Goods receipts (GRN): raw material intake. Increases RM stock."""
import logging
from typing import List

from sqlalchemy.orm import Session

from wiremill.core.enums import ItemCategory
from wiremill.core.exceptions import NotFoundError, StockInconsistencyError
from wiremill.models.receipt import GoodsReceipt
from wiremill.schemas.receipt import ReceiptCreate
from wiremill.services import stock_ledger
from wiremill.services.atomic import atomic_stock_operation
from wiremill.services.charge_calculator import to_decimal
from wiremill.services.lookups import require_item, require_party

logger = logging.getLogger(__name__)

RM = ItemCategory.RM


def list_receipts(db: Session) -> List[GoodsReceipt]:
    return db.query(GoodsReceipt).order_by(GoodsReceipt.grn_date.desc(), GoodsReceipt.id.desc()).all()


def get_receipt(db: Session, receipt_id: int) -> GoodsReceipt:
    receipt = db.query(GoodsReceipt).filter(GoodsReceipt.id == receipt_id).first()
    if not receipt:
        raise NotFoundError("GRN", receipt_id)
    return receipt


def record_receipt(db: Session, data: ReceiptCreate) -> GoodsReceipt:
    party = require_party(db, data.sending_party_id)
    rm_item = require_item(db, data.rm_item_id, RM, "rm_item_id")
    quantity = to_decimal(data.quantity)
    rate = to_decimal(data.rate)

    with atomic_stock_operation(db, "record_receipt", (RM, rm_item.id)) as log:
        receipt = GoodsReceipt(
            sending_party_id=party.id,
            party_challan_number=data.party_challan_number.strip(),
            rm_item_id=rm_item.id,
            quantity=quantity,
            rate=rate,
            total_value=quantity * rate,
        )
        if data.grn_date is not None:
            receipt.grn_date = data.grn_date
        db.add(receipt)
        db.flush()
        stock_ledger.increase(db, RM, rm_item.id, quantity)
        log.record(f"RM {rm_item.id} +{quantity}")

    db.refresh(receipt)
    logger.info(f"GRN {receipt.id}: received {quantity} of RM {rm_item.size} from party {party.id}")
    return receipt


def delete_receipt(db: Session, receipt_id: int) -> None:
    """Remove a receipt and take its quantity back out of RM stock.

    Refused with StockInconsistencyError when that material was already consumed.
    """
    receipt = get_receipt(db, receipt_id)
    rm_id = receipt.rm_item_id
    quantity = to_decimal(receipt.quantity)

    with atomic_stock_operation(db, "delete_receipt", (RM, rm_id)) as log:
        available = stock_ledger.get_quantity(db, RM, rm_id)
        if available < quantity:
            raise StockInconsistencyError(RM.value, rm_id, available, quantity)
        stock_ledger.decrease(db, RM, rm_id, quantity)
        log.record(f"RM {rm_id} -{quantity}")
        db.delete(receipt)

    logger.info(f"GRN {receipt_id} deleted; {quantity} removed from RM {rm_id}")
