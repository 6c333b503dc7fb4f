import random
from datetime import date, datetime

from models import OrderItem
from time_series import (
    generate_category_sales, generate_customer_growth, generate_revenue_data, month_buckets,
)
from tests.factories import NOW, SequenceRandom, make_customer, make_order, make_product


def test_month_buckets_are_contiguous_and_end_with_current_month():
    buckets = month_buckets(NOW)

    assert len(buckets) == 12
    assert buckets[0][0] == datetime(2025, 4, 1)
    assert buckets[-1] == (datetime(2026, 3, 1), datetime(2026, 4, 1))
    for (_, end), (next_start, _) in zip(buckets, buckets[1:]):
        assert end == next_start


def test_month_buckets_across_new_year():
    buckets = month_buckets(datetime(2026, 1, 3))
    assert buckets[0][0] == datetime(2025, 2, 1)
    assert buckets[-1][0] == datetime(2026, 1, 1)


def test_revenue_series_buckets_orders_by_month():
    orders = [
        make_order('ORD-00001', 10.25, 'delivered', datetime(2026, 3, 1)),
        make_order('ORD-00002', 0.25, 'shipped', datetime(2026, 3, 14)),
        make_order('ORD-00003', 500.0, 'cancelled', datetime(2026, 3, 2)),
        make_order('ORD-00004', 99.4, 'pending', datetime(2025, 4, 1)),
        make_order('ORD-00005', 77.0, 'delivered', datetime(2025, 3, 31, 23, 59)),
    ]

    series = generate_revenue_data(orders, NOW)

    assert len(series) == 12
    assert [p.month for p in series][:3] == ['Apr', 'May', 'Jun']
    assert series[-1].month == 'Mar'
    assert series[-1].month_start == date(2026, 3, 1)
    assert (series[-1].revenue, series[-1].orders) == (11, 2)
    assert (series[0].revenue, series[0].orders) == (99, 1)
    assert sum(p.orders for p in series) == 3


def test_revenue_series_is_twelve_zero_buckets_without_orders():
    series = generate_revenue_data([], NOW)
    assert len(series) == 12
    assert all(p.revenue == 0 and p.orders == 0 for p in series)
    starts = [p.month_start for p in series]
    assert starts == sorted(starts)


def test_category_sales_sum_items_and_skip_unknown_products():
    products = [
        make_product('p1', 'Electronics', price=10.0),
        make_product('p2', 'Books', price=5.0),
    ]
    orders = [
        make_order('ORD-00001', 125.0, items=[
            OrderItem('p1', 'Item p1', 2, 10.0),
            OrderItem('p2', 'Item p2', 1, 5.0),
            OrderItem('missing', 'Ghost', 1, 100.0),
        ]),
        make_order('ORD-00002', 1000.0, 'cancelled', items=[OrderItem('p2', 'Item p2', 1, 1000.0)]),
    ]

    sales = generate_category_sales(orders, products)

    assert [(c.category, c.sales, c.percentage) for c in sales] == [
        ('Electronics', 20, 80),
        ('Books', 5, 20),
    ]


def test_category_percentages_are_rounded_shares():
    products = [make_product(f"p{i}", cat, price=1.0) for i, cat in enumerate(['A', 'B', 'C'])]
    orders = [make_order(items=[OrderItem(p.id, p.name, 1, 1.0) for p in products])]

    sales = generate_category_sales(orders, products)

    assert [c.percentage for c in sales] == [33, 33, 33]
    assert sum(c.percentage for c in sales) <= 100


def test_category_percentages_round_each_share_independently():
    # 여섯 카테고리 균등: 16.67% 각각 17 로 반올림되어 합이 102
    categories = ['A', 'B', 'C', 'D', 'E', 'F']
    products = [make_product(f"p{i}", cat, price=1.0) for i, cat in enumerate(categories)]
    orders = [make_order(items=[OrderItem(p.id, p.name, 1, 1.0) for p in products])]

    sales = generate_category_sales(orders, products)

    assert [c.percentage for c in sales] == [17] * 6
    assert sum(c.percentage for c in sales) == 102


def test_category_sales_with_zero_total_has_zero_percentages():
    products = [make_product('p1', 'Books', price=0.0)]
    orders = [make_order(total=0.0, items=[OrderItem('p1', 'Item p1', 2, 0.0)])]

    sales = generate_category_sales(orders, products)

    assert [(c.category, c.sales, c.percentage) for c in sales] == [('Books', 0, 0)]
    assert generate_category_sales([], products) == []


def test_customer_growth_counts_new_customers_per_month():
    customers = [make_customer(f"c{i}", datetime(2026, 3, 1 + i)) for i in range(10)]
    customers.append(make_customer('old', datetime(2024, 1, 1)))

    growth = generate_customer_growth(SequenceRandom([0.0]), customers, NOW)

    assert len(growth) == 12
    assert (growth[-1].new_customers, growth[-1].returning_customers) == (10, 6)
    assert sum(g.new_customers for g in growth) == 10


def test_returning_customers_stay_within_simulated_ratio():
    customers = [make_customer(f"c{i}", datetime(2025, 5 + i % 6, 3)) for i in range(120)]
    growth = generate_customer_growth(random.Random(5), customers, NOW)

    for point in growth:
        assert int(point.new_customers * 0.6) <= point.returning_customers <= int(point.new_customers * 0.8)
