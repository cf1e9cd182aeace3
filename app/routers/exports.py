from datetime import datetime, timezone
from decimal import Decimal
from io import BytesIO

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.finance import calculate_summary, range_start, sales_in_window
from app.core.rate_limiter import limiter
from app.database import get_db
from app.schemas.finance import TimeRange

router = APIRouter(prefix="/exports", tags=["Exports"])


# =========================================================
# EXPORT ROUTE
# =========================================================
@router.get("/sales.xlsx")
@limiter.limit(settings.EXPORT_RATE_LIMIT)
def export_sales(
    request: Request,
    time_range: TimeRange = Query("month", alias="range"),
    db: Session = Depends(get_db),
):
    now = datetime.now(timezone.utc)
    workbook = build_workbook(db, time_range, now)

    output = BytesIO()
    workbook.save(output)
    output.seek(0)

    filename = f"sales_{time_range}_{now.date()}.xlsx"

    return StreamingResponse(
        output,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =========================================================
# EXCEL BUILDER
# =========================================================
def build_workbook(db: Session, time_range: str, now: datetime) -> Workbook:
    workbook = Workbook()

    # =======================
    # SHEET 1 - RAW SALES
    # =======================
    sheet = workbook.active
    sheet.title = "Sales Data"

    sheet.append([
        "Date",
        "Sale ID",
        "Item",
        "Quantity",
        "Price Per Item",
        "Line Total",
        "Sale Total",
        "Amount Paid",
    ])

    for sale in sales_in_window(db, range_start(now, time_range)):
        for line in sale.items:
            sheet.append([
                sale.created_at.strftime("%Y-%m-%d"),
                sale.id,
                line.item_name or "Deleted item",
                line.quantity,
                float(line.price_per_item),
                float(line.line_total),
                float(sale.total_amount),
                float(sale.amount_paid),
            ])

    # =======================
    # SHEET 2 - SUMMARY
    # =======================
    report = calculate_summary(db, time_range, now=now)

    summary = workbook.create_sheet(title="Summary")

    summary.append(["Period", f"{report['start'].date()} to {report['end'].date()}"])
    summary.append([])

    if report["total_revenue"] == 0:
        margin = Decimal("0.00")
    else:
        margin = ((report["profit"] / report["total_revenue"]) * 100).quantize(Decimal("0.01"))

    summary.append(["Total Revenue", float(report["total_revenue"])])
    summary.append(["Total Cost", float(report["total_cost"])])
    summary.append(["Profit", float(report["profit"])])
    summary.append(["Profit Margin (%)", float(margin)])
    summary.append(["Sales", report["sales_count"]])
    summary.append([
        "Top Item",
        report["top_items"][0]["name"] if report["top_items"] else "N/A",
    ])

    return workbook
