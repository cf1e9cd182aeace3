# app/models/items.py

from sqlalchemy import Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    cost_price = Column(Numeric(10, 2), nullable=False)
    sell_price = Column(Numeric(10, 2), nullable=False)
    inventory_count = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Sale history outlives the item; open requests do not
    sale_items = relationship("SaleItem", back_populates="item", passive_deletes=True)
    requests = relationship(
        "CustomerRequest",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
