# queries.py
import math

from errors import InvalidConfigurationError

DEFAULT_PER_PAGE = 10


def _matches(search, *fields):
    needle = (search or '').strip().lower()
    if not needle:
        return True
    return any(needle in (value or '').lower() for value in fields)


def filter_orders(orders, search='', status=''):
    """주문 번호 / 고객명 / 이메일 부분 검색 + 상태 일치"""
    return [
        o for o in orders
        if _matches(search, o.id, o.customer_name, o.customer_email)
        and (not status or o.status == status)
    ]


def filter_products(products, search='', category='', stock_status=''):
    return [
        p for p in products
        if _matches(search, p.name, p.category)
        and (not category or p.category == category)
        and (not stock_status or p.stock_status == stock_status)
    ]


def filter_customers(customers, search=''):
    """이름 / 이메일 검색 후 누적 구매액 내림차순"""
    matched = [c for c in customers if _matches(search, c.name, c.email)]
    return sorted(matched, key=lambda c: c.total_spent, reverse=True)


def find_order(orders, order_id):
    return next((o for o in orders if o.id == order_id), None)


def paginate(items, page=1, per_page=DEFAULT_PER_PAGE):
    if per_page < 1:
        raise InvalidConfigurationError(f"per_page 값은 1 이상이어야 합니다: {per_page}")

    total_items = len(items)
    total_pages = max(1, math.ceil(total_items / per_page))
    current_page = min(max(page, 1), total_pages)
    start = (current_page - 1) * per_page
    page_items = list(items[start:start + per_page])

    return {
        'items': page_items,
        'current_page': current_page,
        'total_pages': total_pages,
        'total_items': total_items,
        'start_index': start + 1 if page_items else 0,
        'end_index': start + len(page_items),
    }
