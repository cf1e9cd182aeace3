# =========================================================
# SALES HISTORY ROUTER
#
# Sales are created through cart checkout; this router
# only reads them back, newest first.
# =========================================================

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.database import get_db
from app.models.sales import Sale
from app.models.sale_items import SaleItem
from app.schemas.sale import SaleResponse

router = APIRouter(prefix="/sales", tags=["Sales"])


# =========================================================
# LIST SALES
# =========================================================
@router.get("", response_model=list[SaleResponse])
def list_sales(
    db: Session = Depends(get_db),
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    return (
        db.query(Sale)
        .options(selectinload(Sale.items).selectinload(SaleItem.item))
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .limit(limit or settings.SALES_HISTORY_LIMIT)
        .offset(offset)
        .all()
    )


# =========================================================
# GET SINGLE SALE
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
):
    sale = (
        db.query(Sale)
        .options(selectinload(Sale.items).selectinload(SaleItem.item))
        .filter(Sale.id == sale_id)
        .first()
    )

    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found",
        )

    return sale
