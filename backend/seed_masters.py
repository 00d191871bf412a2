"""Seed item, party, GST and BOM masters for a local wire drawing setup."""
from decimal import Decimal

from sqlalchemy.orm import Session

from wiremill.core.config import settings
from wiremill.db.init_db import init_db
from wiremill.db.session import create_db_engine, create_session_factory
from wiremill.models import BOMRule, GSTRate, Item, Party

ITEMS = [
    # category, size, grade, mill, hsn
    ("RM", "8mm", "MS", "Tata Steel", "7213"),
    ("RM", "6.5mm", "MS", "Tata Steel", "7213"),
    ("RM", "8mm", "EN8", "JSW", "7213"),
    ("FG", "6mm", "MS", "Tata Steel", "7217"),
    ("FG", "5mm", "MS", "Tata Steel", "7217"),
    ("FG", "4mm", "MS", "Tata Steel", "7217"),
    ("FG", "6mm", "EN8", "JSW", "7217"),
]

PARTIES = [
    {
        "party_name": "Shree Ganesh Wires",
        "address": "Plot 14, GIDC Vatva, Ahmedabad",
        "gst_number": "24AAACS1234F1Z5",
        "contact_number": "9825012345",
        "annealing_charge": Decimal("2.50"),
        "draw_charge": Decimal("1.75"),
    },
    {
        "party_name": "Balaji Fasteners",
        "address": "MIDC Bhosari, Pune",
        "gst_number": "27AABCB5678K1Z2",
        "contact_number": "9822098765",
        "annealing_charge": Decimal("3.00"),
        "draw_charge": Decimal("2.00"),
    },
]

GST_RATES = [("7213", Decimal("18")), ("7217", Decimal("18"))]

BOM_RULES = [
    # fg, rm, grade, annealing min/max, draw pass min/max
    ("6mm", "8mm", "MS", 0, 3, 1, 4),
    ("5mm", "8mm", "MS", 1, 4, 2, 6),
    ("4mm", "6.5mm", "MS", 1, 5, 3, 8),
    ("6mm", "8mm", "EN8", 1, 3, 1, 3),
]


def seed_masters(db: Session) -> dict:
    """Insert the masters that are missing. Returns counts of rows created."""
    created = {"items": 0, "parties": 0, "gst_rates": 0, "bom_rules": 0}

    for category, size, grade, mill, hsn in ITEMS:
        exists = db.query(Item).filter_by(category=category, size=size, grade=grade, mill=mill).first()
        if not exists:
            db.add(Item(category=category, size=size, grade=grade, mill=mill, hsn_code=hsn))
            created["items"] += 1

    for party in PARTIES:
        if not db.query(Party).filter_by(party_name=party["party_name"]).first():
            db.add(Party(**party))
            created["parties"] += 1

    for hsn, percentage in GST_RATES:
        if not db.query(GSTRate).filter_by(hsn_code=hsn).first():
            db.add(GSTRate(hsn_code=hsn, gst_percentage=percentage))
            created["gst_rates"] += 1

    for fg, rm, grade, a_min, a_max, d_min, d_max in BOM_RULES:
        if not db.query(BOMRule).filter_by(fg_size=fg, rm_size=rm, grade=grade).first():
            db.add(
                BOMRule(
                    fg_size=fg,
                    rm_size=rm,
                    grade=grade,
                    annealing_min=a_min,
                    annealing_max=a_max,
                    draw_pass_min=d_min,
                    draw_pass_max=d_max,
                )
            )
            created["bom_rules"] += 1

    db.commit()
    return created


if __name__ == "__main__":
    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine)
    db = create_session_factory(engine)()
    try:
        counts = seed_masters(db)
        print(f"Seeded masters into {settings.DATABASE_URL}: {counts}")
    finally:
        db.close()
        engine.dispose()
