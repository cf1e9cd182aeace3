# app/routers/requests.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.models.items import Item
from app.models.requests import CustomerRequest
from app.schemas.request import RequestCreate, RequestResponse

router = APIRouter(
    prefix="/requests",
    tags=["Requests"],
)

logger = logging.getLogger("app")


@router.get("", response_model=list[RequestResponse])
def list_requests(db: Session = Depends(get_db)):
    return (
        db.query(CustomerRequest)
        .options(joinedload(CustomerRequest.item))
        .order_by(CustomerRequest.created_at.desc(), CustomerRequest.id.desc())
        .all()
    )


@router.post(
    "",
    response_model=RequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_request(
    request_data: RequestCreate,
    db: Session = Depends(get_db),
):
    if request_data.item_id is not None:
        item = db.query(Item).filter(Item.id == request_data.item_id).first()

        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not found",
            )

    customer_request = CustomerRequest(
        item_id=request_data.item_id,
        custom_item_name=request_data.custom_item_name,
        customer_name=request_data.customer_name,
        customer_phone=request_data.customer_phone,
        customer_email=request_data.customer_email,
    )

    db.add(customer_request)
    db.commit()
    db.refresh(customer_request)

    return customer_request


# Fulfilling a request removes it
@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def fulfil_request(
    request_id: int,
    db: Session = Depends(get_db),
):
    customer_request = (
        db.query(CustomerRequest)
        .filter(CustomerRequest.id == request_id)
        .first()
    )

    if not customer_request:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Request not found",
        )

    db.delete(customer_request)
    db.commit()

    logger.info(f"Request {request_id} fulfilled")

    return None
