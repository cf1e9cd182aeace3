import os
from datetime import datetime, timezone
from decimal import Decimal

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.cart_store import cart_store
from app.core.rate_limiter import limiter
from app.database import Base, get_db, set_sqlite_pragma
from app.main import app
from app.models.items import Item
from app.models.sale_items import SaleItem
from app.models.sales import Sale


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", set_sqlite_pragma)
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    cart_store.reset()

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    limiter.enabled = True
    cart_store.reset()


@pytest.fixture()
def make_item(db_session):
    def _make_item(name="Cola", cost_price="0.50", sell_price="1.25", inventory_count=10):
        item = Item(
            name=name,
            cost_price=Decimal(cost_price),
            sell_price=Decimal(sell_price),
            inventory_count=inventory_count,
        )
        db_session.add(item)
        db_session.commit()
        db_session.refresh(item)
        return item

    return _make_item


@pytest.fixture()
def make_sale(db_session):
    def _make_sale(lines, created_at=None, amount_paid=None):
        """lines: list of (item, quantity) pairs, priced at the item's sell price."""
        total = sum((item.sell_price * quantity for item, quantity in lines), Decimal("0.00"))
        sale = Sale(
            total_amount=total,
            amount_paid=total if amount_paid is None else Decimal(amount_paid),
            created_at=created_at or datetime.now(timezone.utc),
        )
        db_session.add(sale)
        db_session.flush()

        for item, quantity in lines:
            db_session.add(
                SaleItem(
                    sale_id=sale.id,
                    item_id=item.id,
                    quantity=quantity,
                    price_per_item=item.sell_price,
                )
            )

        db_session.commit()
        db_session.refresh(sale)
        return sale

    return _make_sale
