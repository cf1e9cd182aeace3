# app/routers/finance.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.finance import calculate_summary
from app.database import get_db
from app.schemas.finance import FinanceSummaryResponse, TimeRange

router = APIRouter(prefix="/finance", tags=["Finance"])


@router.get("/summary", response_model=FinanceSummaryResponse)
def finance_summary(
    time_range: TimeRange = Query("month", alias="range"),
    db: Session = Depends(get_db),
):
    return calculate_summary(db, time_range)
