# data_generator.py
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from models import (
    CATEGORIES, FIRST_NAMES, LAST_NAMES, ORDER_STATUSES, PRODUCT_NAMES, STATUS_WEIGHTS,
    Customer, Order, OrderItem, Product,
)
from random_utils import (
    RandomSource, generate_id, pick_uniform, random_date_within, random_int,
    round_half_up, weighted_choice,
)

logger = logging.getLogger(__name__)

PRODUCT_MONTHS_BACK = 12
CUSTOMER_MONTHS_BACK = 18
LAST_ORDER_MONTHS_BACK = 3
ORDER_MONTHS_BACK = 12
LAST_ORDER_PROBABILITY = 0.9


def _unique_id(rng: RandomSource, seen: set) -> str:
    new_id = generate_id(rng)
    while new_id in seen:
        new_id = generate_id(rng)
    seen.add(new_id)
    return new_id


def random_status(rng: RandomSource) -> str:
    return weighted_choice(rng, ORDER_STATUSES, STATUS_WEIGHTS)


def generate_products(rng: RandomSource, count: int = 100, now: Optional[datetime] = None) -> List[Product]:
    """
    상품을 생성합니다. 카테고리 -> 카테고리별 상품명 순으로 균등 추출하고,
    이름 뒤에 1부터 시작하는 순번을 붙여 표시명을 구분합니다.
    가격은 $9.99 ~ $499.99 사이의 '.99' 가격입니다.
    """
    now = now or datetime.now()
    seen_ids = set()
    products = []

    for i in range(count):
        category = pick_uniform(rng, CATEGORIES)
        base_name = pick_uniform(rng, PRODUCT_NAMES[category])
        product_id = _unique_id(rng, seen_ids)

        products.append(Product(
            id=product_id,
            name=f"{base_name} #{i + 1}",
            description=f"High-quality {base_name.lower()} for everyday use.",
            category=category,
            price=round_half_up(random_int(rng, 1, 50) * 10 - 0.01, 2),
            stock=random_int(rng, 0, 200),
            image_url=f"https://picsum.photos/seed/{product_id}/200/200",
            total_sales=random_int(rng, 0, 500),
            created_at=random_date_within(rng, PRODUCT_MONTHS_BACK, now),
        ))

    return products


def generate_customers(rng: RandomSource, count: int = 200, now: Optional[datetime] = None) -> List[Customer]:
    """
    고객을 생성합니다. 이름 조합은 중복될 수 있으며 고유성은 id 가 보장합니다.
    total_orders / total_spent 는 독립적으로 샘플링한 요약 값으로,
    실제 생성된 주문과 맞춰 보지 않습니다.
    """
    now = now or datetime.now()
    seen_ids = set()
    customers = []

    for _ in range(count):
        first_name = pick_uniform(rng, FIRST_NAMES)
        last_name = pick_uniform(rng, LAST_NAMES)
        email = f"{first_name}.{last_name}{random_int(rng, 1, 99)}@email.com".lower()
        customer_id = _unique_id(rng, seen_ids)

        total_orders = random_int(rng, 1, 30)
        total_spent = float(random_int(rng, 50, 5000))
        created_at = random_date_within(rng, CUSTOMER_MONTHS_BACK, now)
        last_order_at = None
        if rng.random() < LAST_ORDER_PROBABILITY:
            last_order_at = random_date_within(rng, LAST_ORDER_MONTHS_BACK, now)

        customers.append(Customer(
            id=customer_id,
            name=f"{first_name} {last_name}",
            email=email,
            avatar=f"https://api.dicebear.com/7.x/avataaars/svg?seed={customer_id}",
            total_orders=total_orders,
            total_spent=total_spent,
            created_at=created_at,
            last_order_at=last_order_at,
        ))

    return customers


def generate_orders(
    rng: RandomSource,
    count: int,
    customers: Sequence[Customer],
    products: Sequence[Product],
    now: Optional[datetime] = None,
) -> List[Order]:
    """
    고객/상품을 참조하는 주문을 생성합니다.

    주문 번호(ORD-00001)는 생성 순서를 따르며, 반환 직전 생성일 내림차순으로
    정렬한 뒤에도 번호를 다시 매기지 않습니다. 고객이나 상품이 비어 있는데
    count > 0 이면 InvalidConfigurationError 가 발생합니다.
    """
    now = now or datetime.now()
    orders = []

    for i in range(count):
        customer = pick_uniform(rng, customers)
        items = []
        total = 0.0

        for _ in range(random_int(rng, 1, 4)):
            product = pick_uniform(rng, products)
            quantity = random_int(rng, 1, 3)
            total += product.price * quantity
            items.append(OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                price=product.price,
            ))

        status = random_status(rng)
        created_at = random_date_within(rng, ORDER_MONTHS_BACK, now)
        updated_at = created_at + timedelta(days=random_int(rng, 0, 7))

        orders.append(Order(
            id=f"ORD-{i + 1:05d}",
            customer_id=customer.id,
            customer_name=customer.name,
            customer_email=customer.email,
            items=tuple(items),
            total=round_half_up(total, 2),
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        ))

    logger.debug("주문 %d건 생성 완료", len(orders))
    orders.sort(key=lambda o: o.created_at, reverse=True)
    return orders
