"""Outward challans: RM -> FG conversions that move stock."""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wiremill.api.deps import get_db
from wiremill.schemas.conversion import ConversionCreate, ConversionResponse, ConversionUpdate, ReversalSummary
from wiremill.services import conversion_workflow

router = APIRouter()


@router.get("", response_model=List[ConversionResponse])
def list_conversions(db: Session = Depends(get_db)):
    return conversion_workflow.list_conversions(db)


@router.post("", response_model=ConversionResponse, status_code=status.HTTP_201_CREATED)
def create_conversion(data: ConversionCreate, db: Session = Depends(get_db)):
    """Validate against the BOM, then consume RM and produce FG in one step."""
    return conversion_workflow.create_conversion(db, data)


@router.get("/{conversion_id}", response_model=ConversionResponse)
def get_conversion(conversion_id: int, db: Session = Depends(get_db)):
    return conversion_workflow.get_conversion(db, conversion_id)


@router.put("/{conversion_id}", response_model=ConversionResponse)
def update_conversion(conversion_id: int, data: ConversionUpdate, db: Session = Depends(get_db)):
    return conversion_workflow.update_conversion(db, conversion_id, data)


@router.delete("/{conversion_id}", response_model=ReversalSummary)
def delete_conversion(conversion_id: int, db: Session = Depends(get_db)):
    return conversion_workflow.delete_conversion(db, conversion_id)
