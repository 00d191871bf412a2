"""BOM rules: conversion paths and their process envelopes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from wiremill.api.deps import get_db
from wiremill.schemas.bom import BOMRuleCreate, BOMRuleResponse
from wiremill.services import bom_registry

router = APIRouter()


@router.get("", response_model=List[BOMRuleResponse])
def list_rules(fg_size: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """All rules, or only the Active rules for one FG size."""
    return bom_registry.list_rules(db, fg_size=fg_size)


@router.post("", response_model=BOMRuleResponse, status_code=status.HTTP_201_CREATED)
def create_rule(data: BOMRuleCreate, db: Session = Depends(get_db)):
    return bom_registry.upsert(db, data)


@router.get("/by-rm", response_model=List[BOMRuleResponse])
def rules_for_rm(rm_size: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    """Finish sizes a given RM size can be drawn into."""
    return bom_registry.find_rules_for_rm(db, rm_size)


@router.get("/options/{rm_item_id}", response_model=List[BOMRuleResponse])
def conversion_options(rm_item_id: int, db: Session = Depends(get_db)):
    return bom_registry.list_conversion_options(db, rm_item_id)


@router.get("/resolve/{fg_item_id}", response_model=Optional[BOMRuleResponse])
def resolve_conversion(fg_item_id: int, db: Session = Depends(get_db)):
    return bom_registry.resolve_conversion(db, fg_item_id)


@router.get("/{rule_id}", response_model=BOMRuleResponse)
def get_rule(rule_id: int, db: Session = Depends(get_db)):
    return bom_registry.get_rule(db, rule_id)


@router.put("/{rule_id}", response_model=BOMRuleResponse)
def update_rule(rule_id: int, data: BOMRuleCreate, db: Session = Depends(get_db)):
    return bom_registry.upsert(db, data, rule_id=rule_id)


@router.delete("/{rule_id}")
def delete_rule(rule_id: int, db: Session = Depends(get_db)):
    bom_registry.delete_rule(db, rule_id)
    return {"ok": True, "id": rule_id}
