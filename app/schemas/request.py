from datetime import datetime

from pydantic import BaseModel, model_validator


class RequestCreate(BaseModel):
    item_id: int | None = None
    custom_item_name: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None

    @model_validator(mode="after")
    def item_or_custom_name(self):
        if self.custom_item_name is not None:
            self.custom_item_name = self.custom_item_name.strip() or None

        # Empty contact fields are stored as NULL
        for field in ("customer_name", "customer_phone", "customer_email"):
            value = getattr(self, field)
            if value is not None:
                setattr(self, field, value.strip() or None)

        if (self.item_id is None) == (self.custom_item_name is None):
            raise ValueError("Provide either item_id or custom_item_name")
        return self


class RequestResponse(BaseModel):
    id: int
    item_id: int | None
    item_name: str | None
    custom_item_name: str | None
    customer_name: str | None
    customer_phone: str | None
    customer_email: str | None
    created_at: datetime

    class Config:
        from_attributes = True
