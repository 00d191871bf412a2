"""Tax invoice derivation from a completed outward challan.

Invoices are fiscal documents only: creating or deleting one never moves stock.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wiremill.core.config import settings
from wiremill.core.enums import SupplyType
from wiremill.core.exceptions import DataIntegrityError, DuplicateInvoiceError, NoGSTRateError, NotFoundError
from wiremill.models.conversion import ConversionTransaction
from wiremill.models.invoice import TaxInvoice
from wiremill.models.item import Item
from wiremill.models.party import Party
from wiremill.schemas.invoice import InvoiceCreate
from wiremill.services import charge_calculator
from wiremill.services.charge_calculator import Number, percentage_of, to_decimal
from wiremill.services.conversion_workflow import get_conversion
from wiremill.services.lookups import get_active_gst_rate, get_item
from wiremill.services.numbering import next_number

logger = logging.getLogger(__name__)


def calculate_gst(
    assessable_value: Number,
    gst_percentage: Number,
    supply_type: SupplyType = SupplyType.INTRA_STATE,
) -> dict:
    """GST breakdown for Indian tax compliance.

    Intra-state supplies split the rate evenly into CGST and SGST;
    inter-state supplies carry the whole rate as IGST.

    Returns:
        dict with cgst/sgst/igst percentages and amounts, and gst_amount
    """
    value = to_decimal(assessable_value)
    rate = to_decimal(gst_percentage)
    zero = Decimal("0")

    if supply_type == SupplyType.INTER_STATE:
        igst_amount = percentage_of(value, rate)
        return {
            "cgst_percentage": zero,
            "sgst_percentage": zero,
            "igst_percentage": rate,
            "cgst_amount": zero,
            "sgst_amount": zero,
            "igst_amount": igst_amount,
            "gst_amount": igst_amount,
        }

    half = rate / 2
    cgst_amount = percentage_of(value, half)
    sgst_amount = percentage_of(value, half)
    return {
        "cgst_percentage": half,
        "sgst_percentage": half,
        "igst_percentage": zero,
        "cgst_amount": cgst_amount,
        "sgst_amount": sgst_amount,
        "igst_amount": zero,
        "gst_amount": cgst_amount + sgst_amount,
    }


def derive_invoice(db: Session, data: InvoiceCreate) -> TaxInvoice:
    """Create the tax invoice for a challan.

    Raises:
        NotFoundError: challan (or its FG item) does not exist
        DuplicateInvoiceError: the challan is already invoiced
        NoGSTRateError: no active GST rate for the FG item's HSN code
    """
    conversion = get_conversion(db, data.conversion_id)

    existing = db.query(TaxInvoice).filter(TaxInvoice.conversion_id == conversion.id).first()
    if existing:
        raise DuplicateInvoiceError(conversion.id)

    fg_item = get_item(db, conversion.finish_size_id)
    if not fg_item:
        raise NotFoundError("Item", conversion.finish_size_id)
    gst_rate = get_active_gst_rate(db, fg_item.hsn_code)
    if not gst_rate:
        raise NoGSTRateError(fg_item.hsn_code)

    charges = charge_calculator.compute(
        conversion.quantity,
        conversion.rate,
        conversion.annealing_charge,
        conversion.draw_charge,
        conversion.annealing_count,
        conversion.draw_pass_count,
    )
    transport_charges = to_decimal(data.transport_charges)
    assessable_value = charges.total + transport_charges
    gst = calculate_gst(assessable_value, gst_rate.gst_percentage, data.supply_type)
    tcs_percentage = to_decimal(data.tcs_percentage)
    tcs_amount = percentage_of(assessable_value + gst["gst_amount"], tcs_percentage)

    invoice = TaxInvoice(
        invoice_number=next_number(db, settings.INVOICE_PREFIX),
        conversion_id=conversion.id,
        party_id=conversion.party_id,
        finish_size_id=conversion.finish_size_id,
        original_size_id=conversion.original_size_id,
        annealing_count=conversion.annealing_count,
        draw_pass_count=conversion.draw_pass_count,
        quantity=conversion.quantity,
        rate=conversion.rate,
        annealing_charge=conversion.annealing_charge,
        draw_charge=conversion.draw_charge,
        base_amount=charges.total,
        gst_percentage=to_decimal(gst_rate.gst_percentage),
        transport_charges=transport_charges,
        assessable_value=assessable_value,
        tcs_percentage=tcs_percentage,
        tcs_amount=tcs_amount,
        total_amount=assessable_value + gst["gst_amount"] + tcs_amount,
        irn_number=data.irn_number,
        po_number=data.po_number,
        payment_term=data.payment_term,
        supplier_code=data.supplier_code,
        vehicle_number=data.vehicle_number,
        e_way_bill_no=data.e_way_bill_no,
        dispatched_through=data.dispatched_through,
        packing_type=data.packing_type,
        **gst,
    )
    if data.invoice_date is not None:
        invoice.invoice_date = data.invoice_date
    db.add(invoice)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with another request invoicing the same challan
        db.rollback()
        raise DuplicateInvoiceError(conversion.id)
    db.refresh(invoice)
    logger.info(
        f"Invoice {invoice.invoice_number} for challan {conversion.challan_number}: "
        f"assessable {assessable_value}, GST {gst['gst_amount']} ({data.supply_type.value}), total {invoice.total_amount}"
    )
    return invoice


def get_invoice(db: Session, invoice_id: int) -> TaxInvoice:
    invoice = db.query(TaxInvoice).filter(TaxInvoice.id == invoice_id).first()
    if not invoice:
        raise NotFoundError("Invoice", invoice_id)
    return invoice


def _check_references(db: Session, invoice: TaxInvoice) -> Optional[str]:
    checks = (
        (ConversionTransaction, invoice.conversion_id, "conversion_id"),
        (Party, invoice.party_id, "party_id"),
        (Item, invoice.finish_size_id, "finish_size_id"),
        (Item, invoice.original_size_id, "original_size_id"),
    )
    for model, ref_id, field in checks:
        if not isinstance(ref_id, int) or db.get(model, ref_id) is None:
            return f"{field} {ref_id!r} does not resolve"
    return None


def list_invoices(db: Session) -> List[TaxInvoice]:
    """All invoices, newest first. Broken references are reported, never repaired here."""
    invoices = db.query(TaxInvoice).order_by(TaxInvoice.invoice_date.desc(), TaxInvoice.id.desc()).all()
    for invoice in invoices:
        problem = _check_references(db, invoice)
        if problem:
            logger.error(f"Invoice {invoice.invoice_number} (id {invoice.id}) is corrupted: {problem}")
            raise DataIntegrityError("Invoice", invoice.id, problem)
    return invoices


def delete_invoice(db: Session, invoice_id: int) -> str:
    invoice = get_invoice(db, invoice_id)
    invoice_number = invoice.invoice_number
    db.delete(invoice)
    db.commit()
    logger.info(f"Invoice {invoice_number} deleted")
    return invoice_number
