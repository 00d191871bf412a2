from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from wiremill.core.enums import ItemCategory
from wiremill.db.init_db import init_db
from wiremill.db.session import create_db_engine, create_session_factory
from wiremill.main import create_app
from wiremill.models import BOMRule, GSTRate, Item, Party
from wiremill.services import stock_ledger


def seed_core_masters(db):
    """One party, the 8mm MS -> 6mm MS conversion, 18% GST and 100 of RM in stock."""
    party = Party(
        party_name="Shree Ganesh Wires",
        address="GIDC Vatva, Ahmedabad",
        gst_number="24AAACS1234F1Z5",
        contact_number="9825012345",
        annealing_charge=Decimal("2.5"),
        draw_charge=Decimal("1.75"),
    )
    rm_item = Item(category="RM", size="8mm", grade="MS", mill="Tata Steel", hsn_code="7213")
    fg_item = Item(category="FG", size="6mm", grade="MS", mill="Tata Steel", hsn_code="7217")
    rule = BOMRule(
        fg_size="6mm",
        rm_size="8mm",
        grade="MS",
        annealing_min=0,
        annealing_max=7,
        draw_pass_min=0,
        draw_pass_max=10,
    )
    db.add_all([party, rm_item, fg_item, rule, GSTRate(hsn_code="7217", gst_percentage=Decimal("18"))])
    db.flush()
    stock_ledger.increase(db, ItemCategory.RM, rm_item.id, Decimal("100"))
    db.commit()
    return {"party": party, "rm_item": rm_item, "fg_item": fg_item, "rule": rule}


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def masters(db):
    return seed_core_masters(db)


@pytest.fixture
def app():
    return create_app("sqlite://")


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_masters(app, client):
    """Masters seeded through the app's own session factory. Returns plain ids."""
    db = app.state.session_factory()
    try:
        seeded = seed_core_masters(db)
        return {name: row.id for name, row in seeded.items()}
    finally:
        db.close()


@pytest.fixture
def file_sessions(tmp_path):
    """Session factory over a file-backed database, for tests that need several connections."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'wiremill.db'}")
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()
