"""Tests for product ordering trends and growth rate."""

from __future__ import annotations

from datetime import timedelta

from medinsight.analytics.products import analyze_product_trends, calculate_growth_rate


def _order(now, days_ago, **extra):
    return {"createdAt": (now - timedelta(days=days_ago)).isoformat(), "items": [], **extra}


class TestProductAggregation:
    def test_counts_and_revenue_per_product(self, orders, now):
        result = analyze_product_trends(orders, now)
        top = result.top_products[0]
        assert (top.name, top.count, top.revenue, top.product_id) == ("Vitamin D", 3, 30, "p1")
        bandage = result.top_products[1]
        assert (bandage.name, bandage.count, bandage.revenue, bandage.product_id) == ("Bandage", 1, 5, None)
        assert result.total_orders == 3

    def test_unknown_product_name(self, now):
        result = analyze_product_trends([{"items": [{"price": 3, "quantity": 2}]}], now)
        assert result.top_products[0].name == "Unknown"
        assert result.top_products[0].count == 2

    def test_top_ten_only(self, now):
        orders = [{"items": [{"productName": f"P{i}", "quantity": i + 1}]} for i in range(12)]
        result = analyze_product_trends(orders, now)
        assert len(result.top_products) == 10
        assert result.top_products[0].name == "P11"

    def test_equal_counts_keep_first_seen_order(self, now):
        orders = [{"items": [{"productName": "B"}, {"productName": "A"}]}]
        result = analyze_product_trends(orders, now)
        assert [p.name for p in result.top_products] == ["B", "A"]

    def test_malformed_items_ignored(self, now):
        result = analyze_product_trends([{"items": "oops"}, {}], now)
        assert result.top_products == []
        assert result.total_orders == 2


class TestGrowthRate:
    def test_doubling(self, orders, now):
        assert calculate_growth_rate(orders, now) == 100.0

    def test_no_previous_window(self, now):
        assert calculate_growth_rate([_order(now, 1), _order(now, 2)], now) == 0.0

    def test_decline(self, now):
        orders = [_order(now, 5), _order(now, 40), _order(now, 45)]
        assert calculate_growth_rate(orders, now) == -50.0

    def test_older_orders_ignored(self, now):
        orders = [_order(now, 5), _order(now, 40), _order(now, 120)]
        assert calculate_growth_rate(orders, now) == 0.0

    def test_monotonic_in_recent_orders(self, now):
        base = [_order(now, 40), _order(now, 41), _order(now, 42)]
        rates = [calculate_growth_rate(base + [_order(now, 1)] * n, now) for n in range(6)]
        assert rates == sorted(rates)

    def test_rounded_to_one_decimal(self, now):
        orders = [_order(now, 1)] * 2 + [_order(now, 40)] * 3
        assert calculate_growth_rate(orders, now) == -33.3


class TestProductInsights:
    def test_top_product_and_growth(self, orders, now):
        insights = analyze_product_trends(orders, now).insights
        assert insights == [
            '"Vitamin D" is the most frequently ordered product with 3 orders.',
            "Product orders are growing at 100.0% monthly - strong growth indicator.",
        ]

    def test_decline_message(self, now):
        orders = [_order(now, 5), _order(now, 40), _order(now, 45)]
        insights = analyze_product_trends(orders, now).insights
        assert insights == ["Product orders declined by 50% - investigate market factors."]

    def test_no_orders(self, now):
        result = analyze_product_trends([], now)
        assert result.insights == []
        assert result.growth_rate == 0.0
