# =========================================================
# FINANCE SUMMARY
# Revenue, cost and profit over a trailing window
# (week, month or year), shared by the finance router
# and the Excel export.
# =========================================================

from calendar import monthrange
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.models.items import Item
from app.models.sale_items import SaleItem
from app.models.sales import Sale

CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENTS)


def _shift_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def range_start(now: datetime, time_range: str) -> datetime:
    if time_range == "week":
        return now - timedelta(days=7)
    if time_range == "month":
        return _shift_months(now, -1)
    if time_range == "year":
        return _shift_months(now, -12)
    raise ValueError(f"Unknown time range: {time_range}")


def sales_in_window(db: Session, start: datetime) -> list[Sale]:
    return (
        db.query(Sale)
        .options(selectinload(Sale.items).selectinload(SaleItem.item))
        .filter(Sale.created_at >= start)
        .order_by(Sale.created_at.asc(), Sale.id.asc())
        .all()
    )


def _line_cost(line: SaleItem) -> Decimal:
    # Cost of a deleted item is unknown
    if line.item is None:
        return Decimal("0.00")
    return line.item.cost_price * line.quantity


def calculate_summary(db: Session, time_range: str, now: datetime | None = None) -> dict:
    now = now or datetime.now(timezone.utc)
    start = range_start(now, time_range)

    window = [Sale.created_at >= start]

    total_revenue = (
        db.query(func.coalesce(func.sum(SaleItem.quantity * SaleItem.price_per_item), 0))
        .join(Sale, SaleItem.sale_id == Sale.id)
        .filter(*window)
        .scalar()
    )

    total_cost = (
        db.query(func.coalesce(func.sum(Item.cost_price * SaleItem.quantity), 0))
        .join(SaleItem, SaleItem.item_id == Item.id)
        .join(Sale, SaleItem.sale_id == Sale.id)
        .filter(*window)
        .scalar()
    )

    sales_count = (
        db.query(func.count(Sale.id))
        .filter(*window)
        .scalar()
    )

    total_revenue = _money(total_revenue)
    total_cost = _money(total_cost)

    # DAILY BREAKDOWN
    by_date: dict = {}
    for sale in sales_in_window(db, start):
        day = by_date.setdefault(
            sale.created_at.date(),
            {"sales": 0, "revenue": Decimal("0.00"), "cost": Decimal("0.00")},
        )
        day["sales"] += 1
        day["revenue"] += sale.total_amount
        day["cost"] += sum((_line_cost(line) for line in sale.items), Decimal("0.00"))

    sales_by_date = [
        {
            "date": day,
            "sales": data["sales"],
            "revenue": _money(data["revenue"]),
            "cost": _money(data["cost"]),
            "profit": _money(data["revenue"] - data["cost"]),
        }
        for day, data in sorted(by_date.items())
    ]

    # TOP ITEMS
    revenue_expr = func.sum(SaleItem.quantity * SaleItem.price_per_item)
    top_rows = (
        db.query(
            Item.name.label("name"),
            func.coalesce(func.sum(SaleItem.quantity), 0).label("quantity"),
            func.coalesce(revenue_expr, 0).label("revenue"),
        )
        .join(SaleItem, SaleItem.item_id == Item.id)
        .join(Sale, SaleItem.sale_id == Sale.id)
        .filter(*window)
        .group_by(Item.id, Item.name)
        .order_by(revenue_expr.desc())
        .limit(settings.TOP_ITEMS_LIMIT)
        .all()
    )

    top_items = [
        {"name": row.name, "quantity": int(row.quantity), "revenue": _money(row.revenue)}
        for row in top_rows
    ]

    return {
        "range": time_range,
        "start": start,
        "end": now,
        "total_revenue": total_revenue,
        "total_cost": total_cost,
        "profit": total_revenue - total_cost,
        "sales_count": sales_count,
        "sales_by_date": sales_by_date,
        "top_items": top_items,
    }
