# metrics.py
from datetime import datetime
from typing import Optional, Sequence

from models import Customer, DashboardMetrics, Order
from random_utils import add_months, month_start


def growth_rate(current, previous):
    """전월 대비 증감률(%). 이전 값이 0 이하이면 0을 돌려줍니다."""
    if previous > 0:
        return (current - previous) / previous * 100
    return 0.0


def _average(total, count):
    return total / count if count > 0 else 0.0


def calculate_metrics(
    orders: Sequence[Order],
    customers: Sequence[Customer],
    now: Optional[datetime] = None,
) -> DashboardMetrics:
    """
    대시보드 KPI 를 계산합니다.

    이번 달 / 지난 달 경계는 데이터의 시각 범위가 아니라 now 의 달력 월로 정합니다.
    매출과 주문 수는 취소 주문을 모두 제외합니다.
    """
    now = now or datetime.now()
    this_month = month_start(now)
    last_month = add_months(now, -1)

    valid_orders = [o for o in orders if not o.is_cancelled]
    this_month_orders = [o for o in valid_orders if o.created_at >= this_month]
    last_month_orders = [o for o in valid_orders if last_month <= o.created_at < this_month]

    total_revenue = sum(o.total for o in valid_orders)
    this_month_revenue = sum(o.total for o in this_month_orders)
    last_month_revenue = sum(o.total for o in last_month_orders)

    total_orders = len(valid_orders)
    this_month_count = len(this_month_orders)
    last_month_count = len(last_month_orders)

    this_month_customers = sum(1 for c in customers if c.created_at >= this_month)
    last_month_customers = sum(1 for c in customers if last_month <= c.created_at < this_month)

    this_month_avg = _average(this_month_revenue, this_month_count)
    last_month_avg = _average(last_month_revenue, last_month_count)

    return DashboardMetrics(
        total_revenue=float(total_revenue),
        revenue_growth=growth_rate(this_month_revenue, last_month_revenue),
        total_orders=total_orders,
        orders_growth=growth_rate(this_month_count, last_month_count),
        total_customers=len(customers),
        customers_growth=growth_rate(this_month_customers, last_month_customers),
        avg_order_value=_average(total_revenue, total_orders),
        avg_order_value_growth=growth_rate(this_month_avg, last_month_avg),
    )
