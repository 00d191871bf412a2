"""Master-data reads consumed by the conversion core (items, parties, GST rates)."""
from typing import Optional

from sqlalchemy.orm import Session

from wiremill.core.enums import ItemCategory
from wiremill.core.exceptions import CategoryMismatchError, NotFoundError, ValidationError
from wiremill.models.gst_rate import GSTRate
from wiremill.models.item import Item
from wiremill.models.party import Party


def get_item(db: Session, item_id: int) -> Optional[Item]:
    return db.query(Item).filter(Item.id == item_id).first()


def get_party(db: Session, party_id: int) -> Optional[Party]:
    return db.query(Party).filter(Party.id == party_id).first()


def get_active_gst_rate(db: Session, hsn_code: str) -> Optional[GSTRate]:
    return (
        db.query(GSTRate)
        .filter(GSTRate.hsn_code == hsn_code, GSTRate.is_active.is_(True))
        .first()
    )


def require_party(db: Session, party_id: int) -> Party:
    party = get_party(db, party_id)
    if not party:
        raise NotFoundError("Party", party_id)
    if not party.is_active:
        raise ValidationError("party_id", f"party {party_id} is inactive")
    return party


def require_item(db: Session, item_id: int, category: ItemCategory, field: str) -> Item:
    """Load an item that must exist, be active and belong to `category`."""
    item = get_item(db, item_id)
    if not item:
        raise NotFoundError("Item", item_id)
    if item.category != category.value:
        raise CategoryMismatchError(category.value, item.category, item_id=item_id)
    if not item.is_active:
        raise ValidationError(field, f"item {item_id} is inactive")
    return item
