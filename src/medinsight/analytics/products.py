"""Product ordering trends: volume, revenue and 30-day growth."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from medinsight.analytics.models import ProductAnalytics, ProductTrend
from medinsight.records import (
    first_truthy,
    format_number,
    get_field,
    parse_datetime,
    record_id,
    round_half_up,
    safe_num,
    to_fixed,
)

log = logging.getLogger(__name__)

TOP_N = 10
GROWTH_WINDOW = timedelta(days=30)


def analyze_product_trends(
    orders: Sequence[dict[str, Any]],
    now: Optional[datetime] = None,
) -> ProductAnalytics:
    """Aggregate order line items per product and compare the last two 30-day windows."""
    frequency: dict[str, dict[str, Any]] = {}

    for order in orders:
        items = get_field(order, "items") or []
        if not isinstance(items, list):
            continue
        for item in items:
            product = get_field(item, "product")
            name = first_truthy(get_field(product, "name"), get_field(item, "productName"), default="Unknown")
            name = str(name)
            quantity = safe_num(get_field(item, "quantity")) or 1
            price = safe_num(get_field(item, "price"))

            entry = frequency.setdefault(
                name, {"count": 0, "revenue": 0, "product_id": record_id(product)}
            )
            entry["count"] += quantity
            entry["revenue"] += price * quantity

    top_products = sorted(
        (ProductTrend(name=name, **data) for name, data in frequency.items()),
        key=lambda p: p.count,
        reverse=True,
    )[:TOP_N]

    growth_rate = calculate_growth_rate(orders, now)

    return ProductAnalytics(
        top_products=top_products,
        total_orders=len(orders),
        growth_rate=growth_rate,
        insights=product_insights(top_products, growth_rate),
    )


def calculate_growth_rate(orders: Sequence[dict[str, Any]], now: Optional[datetime] = None) -> float:
    """Percent change in order count, last 30 days against the 30 days before.

    Returns 0 when the previous window is empty.
    """
    now = now or datetime.now(timezone.utc)
    last_start = now - GROWTH_WINDOW
    prev_start = now - 2 * GROWTH_WINDOW

    last_30 = 0
    prev_30 = 0
    for order in orders:
        created = parse_datetime(get_field(order, "createdAt"))
        if created is None:
            continue
        if created > last_start:
            last_30 += 1
        elif prev_start < created <= last_start:
            prev_30 += 1

    if prev_30 == 0:
        return 0.0
    return round_half_up((last_30 - prev_30) / prev_30 * 100, 1)


def product_insights(top_products: Sequence[ProductTrend], growth_rate: float) -> list[str]:
    insights: list[str] = []
    if top_products:
        top = top_products[0]
        insights.append(
            f'"{top.name}" is the most frequently ordered product with {format_number(top.count)} orders.'
        )
    if growth_rate > 10:
        insights.append(
            f"Product orders are growing at {to_fixed(growth_rate, 1)}% monthly - strong growth indicator."
        )
    elif growth_rate < 0:
        insights.append(
            f"Product orders declined by {format_number(abs(growth_rate))}% - investigate market factors."
        )
    return insights
