from decimal import Decimal

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from wiremill.core.enums import ItemCategory, SupplyType
from wiremill.core.exceptions import (
    ConflictError,
    DataIntegrityError,
    DuplicateInvoiceError,
    NoGSTRateError,
    NotFoundError,
)
from wiremill.db.init_db import init_db
from wiremill.db.session import create_session_factory
from wiremill.models import GSTRate, TaxInvoice
from wiremill.schemas.conversion import ConversionCreate
from wiremill.schemas.invoice import InvoiceCreate
from wiremill.services import conversion_workflow, invoice_service, stock_ledger
from wiremill.services.invoice_service import calculate_gst

from conftest import seed_core_masters


def _challan(db, masters, quantity="40"):
    return conversion_workflow.create_conversion(
        db,
        ConversionCreate(
            party_id=masters["party"].id,
            finish_size_id=masters["fg_item"].id,
            original_size_id=masters["rm_item"].id,
            annealing_count=2,
            draw_pass_count=3,
            quantity=Decimal(quantity),
            rate=Decimal("50"),
        ),
    )


def test_calculate_gst_intra_state_splits_evenly():
    gst = calculate_gst(Decimal("1000"), Decimal("18"))

    assert gst["cgst_percentage"] == gst["sgst_percentage"] == Decimal("9")
    assert gst["cgst_amount"] == gst["sgst_amount"] == Decimal("90")
    assert gst["igst_amount"] == 0
    assert gst["gst_amount"] == Decimal("180")


def test_calculate_gst_inter_state_is_igst_only():
    gst = calculate_gst(Decimal("1000"), Decimal("18"), SupplyType.INTER_STATE)

    assert gst["igst_percentage"] == Decimal("18")
    assert gst["igst_amount"] == Decimal("180")
    assert gst["cgst_amount"] == gst["sgst_amount"] == 0
    assert gst["gst_amount"] == Decimal("180")


def test_derive_invoice_from_challan(db, masters):
    conversion = _challan(db, masters)

    invoice = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))

    assert invoice.invoice_number == "INV0001"
    assert invoice.base_amount == Decimal("2410")
    assert invoice.assessable_value == Decimal("2410")
    assert invoice.cgst_percentage == invoice.sgst_percentage == Decimal("9")
    assert invoice.cgst_amount == invoice.sgst_amount == Decimal("216.9")
    assert invoice.gst_amount == Decimal("2410") * Decimal("0.18")
    assert invoice.total_amount == Decimal("2843.8")
    assert invoice.payment_term == "0 Days"
    assert invoice.dispatched_through == "By Road"
    assert invoice.packing_type == "KGS"


def test_invoice_copies_challan_values(db, masters):
    conversion = _challan(db, masters)

    invoice = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))

    assert invoice.party_id == conversion.party_id
    assert invoice.quantity == conversion.quantity
    assert invoice.annealing_charge == conversion.annealing_charge
    assert (invoice.annealing_count, invoice.draw_pass_count) == (2, 3)


def test_transport_and_tcs(db, masters):
    conversion = _challan(db, masters)

    invoice = invoice_service.derive_invoice(
        db,
        InvoiceCreate(
            conversion_id=conversion.id,
            supply_type=SupplyType.INTER_STATE,
            transport_charges=Decimal("90"),
            tcs_percentage=Decimal("1"),
            vehicle_number="GJ01AB1234",
        ),
    )

    assert invoice.assessable_value == Decimal("2500")
    assert invoice.igst_amount == Decimal("450")
    assert invoice.cgst_amount == 0
    assert invoice.tcs_amount == Decimal("29.5")
    assert invoice.total_amount == Decimal("2979.5")
    assert invoice.vehicle_number == "GJ01AB1234"


def test_second_invoice_for_same_challan_fails(db, masters):
    conversion = _challan(db, masters)
    invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))

    with pytest.raises(ConflictError) as exc_info:
        invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))

    assert isinstance(exc_info.value, DuplicateInvoiceError)
    assert db.query(TaxInvoice).count() == 1


def test_missing_gst_rate(db, masters):
    conversion = _challan(db, masters)
    db.query(GSTRate).update({GSTRate.is_active: False})
    db.commit()

    with pytest.raises(NoGSTRateError) as exc_info:
        invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))
    assert exc_info.value.hsn_code == "7217"
    assert exc_info.value.to_dict()["code"] == "no_gst_rate"
    assert exc_info.value.status_code == 422


def test_unknown_challan(db, masters):
    with pytest.raises(NotFoundError):
        invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=404))


def test_invoice_lifecycle_never_moves_stock(db, masters):
    conversion = _challan(db, masters)
    rm_id, fg_id = masters["rm_item"].id, masters["fg_item"].id

    invoice = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))
    assert stock_ledger.get_quantity(db, ItemCategory.RM, rm_id) == 60
    assert stock_ledger.get_quantity(db, ItemCategory.FG, fg_id) == 40

    assert invoice_service.delete_invoice(db, invoice.id) == "INV0001"
    assert stock_ledger.get_quantity(db, ItemCategory.RM, rm_id) == 60
    assert stock_ledger.get_quantity(db, ItemCategory.FG, fg_id) == 40

    with pytest.raises(NotFoundError):
        invoice_service.get_invoice(db, invoice.id)


def test_invoice_numbers_keep_counting_after_delete(db, masters):
    first = _challan(db, masters, quantity="10")
    second = _challan(db, masters, quantity="10")

    invoice = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=first.id))
    invoice_service.delete_invoice(db, invoice.id)
    again = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=first.id))
    other = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=second.id))

    assert (again.invoice_number, other.invoice_number) == ("INV0002", "INV0003")


def test_list_invoices(db, masters):
    conversion = _challan(db, masters)
    invoice = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))

    assert [i.id for i in invoice_service.list_invoices(db)] == [invoice.id]


def test_list_reports_dangling_reference_without_deleting():
    # Foreign keys left off so a broken reference can be planted
    engine = create_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        masters = seed_core_masters(db)
        conversion = _challan(db, masters)
        invoice = invoice_service.derive_invoice(db, InvoiceCreate(conversion_id=conversion.id))
        invoice_id = invoice.id

        db.execute(text("DELETE FROM conversion_transactions WHERE id = :id"), {"id": conversion.id})
        db.commit()
        db.expunge_all()

        with pytest.raises(DataIntegrityError):
            invoice_service.list_invoices(db)
        assert db.query(TaxInvoice).filter(TaxInvoice.id == invoice_id).count() == 1
    finally:
        db.close()
        engine.dispose()
