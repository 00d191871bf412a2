"""Goods receipt notes (GRN): raw material intake."""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wiremill.api.deps import get_db
from wiremill.schemas.receipt import ReceiptCreate, ReceiptResponse
from wiremill.services import receipt_service

router = APIRouter()


@router.get("", response_model=List[ReceiptResponse])
def list_receipts(db: Session = Depends(get_db)):
    return receipt_service.list_receipts(db)


@router.post("", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
def record_receipt(data: ReceiptCreate, db: Session = Depends(get_db)):
    return receipt_service.record_receipt(db, data)


@router.delete("/{receipt_id}")
def delete_receipt(receipt_id: int, db: Session = Depends(get_db)):
    receipt_service.delete_receipt(db, receipt_id)
    return {"ok": True, "id": receipt_id}
