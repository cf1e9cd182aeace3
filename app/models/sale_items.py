# models/sale_items.py

from sqlalchemy import Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from app.database import Base


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)

    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="SET NULL"), nullable=True, index=True)

    quantity = Column(Integer, nullable=False)
    price_per_item = Column(Numeric(10, 2), nullable=False)

    sale = relationship("Sale", back_populates="items")
    item = relationship("Item", back_populates="sale_items")

    @property
    def item_name(self):
        return self.item.name if self.item else None

    @property
    def line_total(self):
        return self.price_per_item * self.quantity
