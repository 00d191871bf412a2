"""Tax invoices derived from outward challans. No stock effect."""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wiremill.api.deps import get_db
from wiremill.schemas.invoice import InvoiceCreate, InvoiceResponse
from wiremill.services import invoice_service

router = APIRouter()


@router.get("", response_model=List[InvoiceResponse])
def list_invoices(db: Session = Depends(get_db)):
    return invoice_service.list_invoices(db)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def derive_invoice(data: InvoiceCreate, db: Session = Depends(get_db)):
    return invoice_service.derive_invoice(db, data)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return invoice_service.get_invoice(db, invoice_id)


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice_number = invoice_service.delete_invoice(db, invoice_id)
    return {"ok": True, "message": f"Invoice {invoice_number} deleted successfully"}
