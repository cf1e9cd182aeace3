# app/models/requests.py

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class CustomerRequest(Base):
    __tablename__ = "requests"

    id = Column(Integer, primary_key=True, index=True)

    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=True, index=True)
    custom_item_name = Column(String, nullable=True)

    customer_name = Column(String, nullable=True)
    customer_phone = Column(String, nullable=True)
    customer_email = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    item = relationship("Item", back_populates="requests")

    __table_args__ = (
        CheckConstraint(
            "(item_id IS NULL) <> (custom_item_name IS NULL)",
            name="ck_request_item_or_custom_name",
        ),
    )

    @property
    def item_name(self):
        return self.item.name if self.item else None
