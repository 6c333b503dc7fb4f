# tests/factories.py
from datetime import datetime

from models import Customer, Order, OrderItem, Product

NOW = datetime(2026, 3, 15, 12, 30)


class SequenceRandom:
    """정해진 값을 순서대로(반복) 돌려주는 난수원"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def make_product(product_id='p1', category='Electronics', price=10.0, stock=50, name=None):
    return Product(
        id=product_id,
        name=name or f"Item {product_id}",
        description="High-quality item for everyday use.",
        category=category,
        price=price,
        stock=stock,
        image_url=f"https://picsum.photos/seed/{product_id}/200/200",
        total_sales=0,
        created_at=datetime(2026, 1, 1),
    )


def make_customer(customer_id='c1', created_at=datetime(2025, 6, 1), name='Emma Smith',
                  email='emma.smith1@email.com', total_spent=100.0):
    return Customer(
        id=customer_id,
        name=name,
        email=email,
        avatar=f"https://api.dicebear.com/7.x/avataaars/svg?seed={customer_id}",
        total_orders=1,
        total_spent=total_spent,
        created_at=created_at,
        last_order_at=None,
    )


def make_order(order_id='ORD-00001', total=100.0, status='delivered',
               created_at=datetime(2026, 3, 2), items=None, customer=None):
    customer = customer or make_customer()
    if items is None:
        items = (OrderItem(product_id='p1', product_name='Item p1', quantity=1, price=total),)
    return Order(
        id=order_id,
        customer_id=customer.id,
        customer_name=customer.name,
        customer_email=customer.email,
        items=tuple(items),
        total=total,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )
