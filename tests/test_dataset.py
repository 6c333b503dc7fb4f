import random

import pandas as pd
import pytest

from config import DatasetConfig
from dataset import export_snapshot, generate_dataset, snapshot_to_frames
from errors import InvalidConfigurationError
from models import DATA_MODEL, DashboardMetrics
from random_utils import round_half_up
from tests.factories import NOW


@pytest.fixture(scope='module')
def snapshot():
    return generate_dataset(rng=random.Random(99), now=NOW)


def test_default_sizes(snapshot):
    assert snapshot.counts() == {'products': 100, 'customers': 200, 'orders': 500}
    assert snapshot.generated_at == NOW


def test_snapshot_is_referentially_consistent(snapshot):
    customer_ids = {c.id for c in snapshot.customers}
    product_ids = {p.id for p in snapshot.products}

    for order in snapshot.orders:
        assert order.customer_id in customer_ids
        assert all(item.product_id in product_ids for item in order.items)
        assert order.total == round_half_up(sum(i.price * i.quantity for i in order.items), 2)


def test_snapshot_orders_are_newest_first(snapshot):
    created = [o.created_at for o in snapshot.orders]
    assert created == sorted(created, reverse=True)


def test_snapshot_series_have_twelve_buckets(snapshot):
    assert len(snapshot.revenue_series) == 12
    assert len(snapshot.customer_growth) == 12
    assert snapshot.revenue_series[-1].month_start == NOW.date().replace(day=1)
    assert snapshot.metrics.total_customers == 200


def test_category_percentages_are_consistent(snapshot):
    total = sum(c.sales for c in snapshot.category_sales)
    assert total > 0
    # 카테고리별 사사오입이므로 합은 100을 넘을 수도 있음 (카테고리당 최대 ±0.5)
    assert abs(sum(c.percentage for c in snapshot.category_sales) - 100) <= len(snapshot.category_sales)
    sales = [c.sales for c in snapshot.category_sales]
    assert sales == sorted(sales, reverse=True)


def test_zero_config_returns_empty_snapshot():
    config = DatasetConfig(product_count=0, customer_count=0, order_count=0)

    snapshot = generate_dataset(config, rng=random.Random(1), now=NOW)

    assert snapshot.products == snapshot.customers == snapshot.orders == ()
    assert snapshot.metrics == DashboardMetrics()
    assert snapshot.category_sales == ()
    assert len(snapshot.revenue_series) == 12
    assert all(p.revenue == 0 and p.orders == 0 for p in snapshot.revenue_series)
    assert len(snapshot.customer_growth) == 12
    assert all(g.new_customers == 0 and g.returning_customers == 0 for g in snapshot.customer_growth)


def test_mapping_config_is_accepted():
    snapshot = generate_dataset(
        {'productCount': 0, 'customerCount': 0, 'orderCount': 0}, rng=random.Random(1), now=NOW,
    )

    assert snapshot.products == snapshot.customers == snapshot.orders == ()
    assert snapshot.metrics == DashboardMetrics()
    assert len(snapshot.revenue_series) == 12
    assert all(g.new_customers == 0 for g in snapshot.customer_growth)


def test_mapping_config_fills_missing_sizes_with_defaults():
    snapshot = generate_dataset({'product_count': 4, 'orderCount': 6}, rng=random.Random(2), now=NOW)
    assert snapshot.counts() == {'products': 4, 'customers': 200, 'orders': 6}


def test_mapping_config_rejects_negative_sizes():
    with pytest.raises(InvalidConfigurationError):
        generate_dataset({'orderCount': -1}, rng=random.Random(1), now=NOW)


@pytest.mark.parametrize("counts", [(0, 5, 10), (5, 0, 10), (3, 3, 0), (1, 1, 1)])
def test_any_non_negative_sizes_never_raise(counts):
    product_count, customer_count, order_count = counts
    config = DatasetConfig(product_count, customer_count, order_count)

    snapshot = generate_dataset(config, rng=random.Random(4), now=NOW)

    assert len(snapshot.products) == product_count
    assert len(snapshot.customers) == customer_count
    if product_count and customer_count:
        assert len(snapshot.orders) == order_count
    else:
        assert snapshot.orders == ()


def test_same_seed_reproduces_snapshot_and_different_seed_does_not():
    config = DatasetConfig(10, 10, 20)
    first = generate_dataset(config, rng=random.Random(8), now=NOW)
    again = generate_dataset(config, rng=random.Random(8), now=NOW)
    other = generate_dataset(config, rng=random.Random(9), now=NOW)

    assert first == again
    assert first.products != other.products


def test_snapshot_to_frames_uses_model_columns(snapshot):
    frames = snapshot_to_frames(snapshot)

    for table_name, details in DATA_MODEL.items():
        assert list(frames[table_name].columns) == details['columns']
    assert len(frames['order_items']) == sum(len(o.items) for o in snapshot.orders)
    assert set(frames['orders']['order_id']) == {o.id for o in snapshot.orders}
    assert len(frames['revenue']) == 12


def test_empty_frames_keep_columns():
    snapshot = generate_dataset(DatasetConfig(0, 0, 0), rng=random.Random(1), now=NOW)
    frames = snapshot_to_frames(snapshot)
    assert frames['products'].empty
    assert list(frames['products'].columns) == DATA_MODEL['products']['columns']


def test_export_snapshot_writes_csv_files(tmp_path):
    snapshot = generate_dataset(DatasetConfig(5, 5, 12), rng=random.Random(3), now=NOW)

    paths = export_snapshot(snapshot, str(tmp_path / 'out'))

    assert set(paths) == {'products', 'customers', 'orders', 'order_items',
                          'revenue', 'category_sales', 'customer_growth'}
    products = pd.read_csv(paths['products'], encoding='utf-8-sig')
    assert len(products) == 5
    assert set(products['stock_status']) <= {'in_stock', 'low_stock', 'out_of_stock'}
