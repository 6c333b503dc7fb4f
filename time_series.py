# time_series.py
from collections import defaultdict
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from models import (
    MONTH_LABELS, CategorySales, Customer, CustomerGrowth, Order, Product, RevenueDataPoint,
)
from random_utils import RandomSource, add_months, round_half_up

SERIES_MONTHS = 12
RETURNING_MIN_RATIO = 0.6
RETURNING_RATIO_SPAN = 0.2


def month_buckets(now: Optional[datetime] = None, months: int = SERIES_MONTHS) -> List[Tuple[datetime, datetime]]:
    """now 가 속한 달로 끝나는 [월 시작, 다음 달 시작) 구간들. 오래된 달부터."""
    now = now or datetime.now()
    return [
        (add_months(now, -offset), add_months(now, -offset + 1))
        for offset in range(months - 1, -1, -1)
    ]


def generate_revenue_data(orders: Sequence[Order], now: Optional[datetime] = None) -> List[RevenueDataPoint]:
    valid_orders = [o for o in orders if not o.is_cancelled]
    data = []

    for start, end in month_buckets(now):
        month_orders = [o for o in valid_orders if start <= o.created_at < end]
        revenue = sum(o.total for o in month_orders)
        data.append(RevenueDataPoint(
            month=MONTH_LABELS[start.month - 1],
            month_start=start.date(),
            revenue=int(round_half_up(revenue, 0)),
            orders=len(month_orders),
        ))

    return data


def generate_category_sales(orders: Sequence[Order], products: Sequence[Product]) -> List[CategorySales]:
    """
    취소되지 않은 주문의 품목을 상품 카테고리별로 합산합니다.
    상품 목록에 없는 품목은 건너뜁니다. 전체 매출이 0이면 비율은 0입니다.
    """
    product_lookup = {p.id: p for p in products}
    sales_by_category = defaultdict(float)

    for order in orders:
        if order.is_cancelled:
            continue
        for item in order.items:
            product = product_lookup.get(item.product_id)
            if product is None:
                continue
            sales_by_category[product.category] += item.price * item.quantity

    total = sum(sales_by_category.values())
    result = [
        CategorySales(
            category=category,
            sales=int(round_half_up(sales, 0)),
            percentage=int(round_half_up(sales / total * 100, 0)) if total > 0 else 0,
        )
        for category, sales in sales_by_category.items()
    ]
    result.sort(key=lambda c: c.sales, reverse=True)
    return result


def generate_customer_growth(
    rng: RandomSource,
    customers: Sequence[Customer],
    now: Optional[datetime] = None,
) -> List[CustomerGrowth]:
    # 재방문 고객 수는 실제 구매 이력이 아닌 신규 고객 수의 60~80% 시뮬레이션 값
    data = []

    for start, end in month_buckets(now):
        new_customers = sum(1 for c in customers if start <= c.created_at < end)
        ratio = RETURNING_MIN_RATIO + rng.random() * RETURNING_RATIO_SPAN
        data.append(CustomerGrowth(
            month=MONTH_LABELS[start.month - 1],
            month_start=start.date(),
            new_customers=new_customers,
            returning_customers=int(new_customers * ratio),
        ))

    return data
