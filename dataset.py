# dataset.py
import logging
import os
import random
import time
from datetime import datetime
from typing import Mapping, Optional, Union

import pandas as pd

import data_generator as dg
import dependency_analyzer as da
from config import DatasetConfig
from errors import InvalidConfigurationError
from metrics import calculate_metrics
from models import DATA_MODEL, DERIVED_TABLES, DatasetSnapshot
from random_utils import RandomSource
from time_series import generate_category_sales, generate_customer_growth, generate_revenue_data

logger = logging.getLogger(__name__)


def _build_products(rng, config, tables, now):
    return dg.generate_products(rng, config.product_count, now)


def _build_customers(rng, config, tables, now):
    return dg.generate_customers(rng, config.customer_count, now)


def _build_orders(rng, config, tables, now):
    customers, products = tables['customers'], tables['products']
    if config.order_count and (not customers or not products):
        logger.warning(
            "고객(%d) 또는 상품(%d)이 없어 주문 %d건 생성을 건너뜁니다.",
            len(customers), len(products), config.order_count,
        )
        return []
    return dg.generate_orders(rng, config.order_count, customers, products, now)


# 주문 품목(order_items)은 주문과 함께 생성되므로 별도 생성기가 없습니다.
ENTITY_BUILDERS = {
    'products': _build_products,
    'customers': _build_customers,
    'orders': _build_orders,
}


def generate_dataset(
    config: Union[DatasetConfig, Mapping, None] = None,
    rng: Optional[RandomSource] = None,
    now: Optional[datetime] = None,
) -> DatasetSnapshot:
    """
    상품 -> 고객 -> 주문 -> 지표 -> 시계열 3종을 한 번에 생성해 스냅샷으로 반환합니다.
    같은 설정이라도 호출마다 내용이 달라집니다. 재현이 필요하면 시드를 준 rng 를 넘기세요.
    """
    if config is None:
        config = DatasetConfig()
    elif not isinstance(config, DatasetConfig):
        # {'productCount': ..., 'customerCount': ..., 'orderCount': ...} 형태의 dict
        config = DatasetConfig.from_mapping(config)
    rng = rng or random.Random()
    now = now or datetime.now()
    started = time.perf_counter()

    generation_order = da.get_generation_order(DATA_MODEL)
    if generation_order is None:
        raise InvalidConfigurationError("데이터 모델에 순환 참조가 있습니다.")

    tables = {}
    for table_name in generation_order:
        builder = ENTITY_BUILDERS.get(table_name)
        if builder is None:
            continue
        tables[table_name] = builder(rng, config, tables, now)
        logger.debug("-> %s (%d건) 생성 완료", table_name, len(tables[table_name]))

    products, customers, orders = tables['products'], tables['customers'], tables['orders']

    snapshot = DatasetSnapshot(
        products=tuple(products),
        customers=tuple(customers),
        orders=tuple(orders),
        metrics=calculate_metrics(orders, customers, now),
        revenue_series=tuple(generate_revenue_data(orders, now)),
        category_sales=tuple(generate_category_sales(orders, products)),
        customer_growth=tuple(generate_customer_growth(rng, customers, now)),
        generated_at=now,
    )

    logger.info(
        "데이터셋 생성 완료: 상품 %d, 고객 %d, 주문 %d (%.3fs)",
        len(products), len(customers), len(orders), time.perf_counter() - started,
    )
    return snapshot


# --- 표 형태 변환 / CSV 내보내기 ---
def _table_rows(snapshot):
    return {
        'products': [
            {'product_id': p.id, **{k: v for k, v in p.to_dict().items() if k != 'id'}}
            for p in snapshot.products
        ],
        'customers': [
            {'customer_id': c.id, **{k: v for k, v in c.to_dict().items() if k != 'id'}}
            for c in snapshot.customers
        ],
        'orders': [
            {'order_id': o.id, **{k: v for k, v in o.to_dict().items() if k not in ('id', 'items')}}
            for o in snapshot.orders
        ],
        'order_items': [
            {'order_id': o.id, **item.to_dict()}
            for o in snapshot.orders for item in o.items
        ],
        'revenue': [r.to_dict() for r in snapshot.revenue_series],
        'category_sales': [c.to_dict() for c in snapshot.category_sales],
        'customer_growth': [g.to_dict() for g in snapshot.customer_growth],
    }


def snapshot_to_frames(snapshot: DatasetSnapshot):
    """스냅샷을 테이블별 DataFrame 으로 변환합니다. 컬럼 순서는 DATA_MODEL 을 따릅니다."""
    columns_by_table = {name: details['columns'] for name, details in DATA_MODEL.items()}
    columns_by_table.update(DERIVED_TABLES)

    frames = {}
    for table_name, rows in _table_rows(snapshot).items():
        columns = columns_by_table[table_name]
        frames[table_name] = pd.DataFrame(rows, columns=columns)
    return frames


def export_snapshot(snapshot: DatasetSnapshot, output_dir: str):
    if not os.path.exists(output_dir):
        os.makedirs(output_dir)

    paths = {}
    for table_name, df in snapshot_to_frames(snapshot).items():
        file_path = os.path.join(output_dir, f'{table_name}.csv')
        df.to_csv(file_path, index=False, encoding='utf-8-sig')
        paths[table_name] = file_path
        logger.info("'%s.csv' 저장 완료 (%d행)", table_name, len(df))
    return paths
