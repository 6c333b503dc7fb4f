# models.py
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Optional, Tuple

# 데이터 모델 정의 (CSV 내보내기 컬럼 순서 및 생성 순서 분석에 사용)
DATA_MODEL = {
    'products': {
        'columns': ['product_id', 'name', 'description', 'category', 'price', 'stock',
                    'stock_status', 'image_url', 'total_sales', 'created_at'],
        'description': '상품 정보 테이블'
    },
    'customers': {
        'columns': ['customer_id', 'name', 'email', 'avatar', 'total_orders', 'total_spent',
                    'created_at', 'last_order_at'],
        'description': '고객 정보 테이블'
    },
    'orders': {
        'columns': ['order_id', 'customer_id', 'customer_name', 'customer_email', 'total',
                    'status', 'created_at', 'updated_at'],
        'description': '주문 기본 정보 테이블'
    },
    'order_items': {
        'columns': ['order_id', 'product_id', 'product_name', 'quantity', 'price'],
        'description': '주문 상세 내역 테이블 (주문에 종속)'
    },
}

# 파생 시계열/집계 테이블 (내보내기 전용)
DERIVED_TABLES = {
    'revenue': ['month', 'month_start', 'revenue', 'orders'],
    'category_sales': ['category', 'sales', 'percentage'],
    'customer_growth': ['month', 'month_start', 'new_customers', 'returning_customers'],
}

# --- 데이터 풀 ---
FIRST_NAMES = [
    'James', 'Emma', 'Oliver', 'Ava', 'William', 'Sophia', 'Benjamin', 'Isabella',
    'Lucas', 'Mia', 'Henry', 'Charlotte', 'Alexander', 'Amelia', 'Michael', 'Harper',
    'Ethan', 'Evelyn', 'Daniel', 'Abigail', 'Matthew', 'Emily', 'Aiden', 'Elizabeth',
    'Joseph', 'Sofia', 'Jackson', 'Avery', 'Sebastian', 'Ella', 'David', 'Madison',
]

LAST_NAMES = [
    'Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller', 'Davis',
    'Rodriguez', 'Martinez', 'Hernandez', 'Lopez', 'Gonzalez', 'Wilson', 'Anderson',
    'Thomas', 'Taylor', 'Moore', 'Jackson', 'Martin', 'Lee', 'Perez', 'Thompson',
    'White', 'Harris', 'Sanchez', 'Clark', 'Ramirez', 'Lewis', 'Robinson', 'Walker', 'Young',
]

CATEGORIES = ['Electronics', 'Clothing', 'Home & Garden', 'Sports', 'Books', 'Beauty']

PRODUCT_NAMES = {
    'Electronics': [
        'Wireless Earbuds Pro', 'Smart Watch Ultra', '4K Webcam', 'Bluetooth Speaker',
        'Gaming Mouse', 'Mechanical Keyboard', 'USB-C Hub', 'Portable SSD 1TB',
        'Noise Canceling Headphones', 'Smart Home Hub', 'Wireless Charger Pad', 'Action Camera',
    ],
    'Clothing': [
        'Premium Cotton T-Shirt', 'Slim Fit Jeans', 'Wool Blend Sweater', 'Running Shoes',
        'Leather Jacket', 'Casual Sneakers', 'Dress Shirt', 'Winter Coat',
        'Sport Leggings', 'Denim Jacket', 'Silk Scarf', 'Canvas Backpack',
    ],
    'Home & Garden': [
        'Smart LED Bulbs (4-pack)', 'Robot Vacuum', 'Air Purifier', 'Indoor Plant Set',
        'Memory Foam Pillow', 'Weighted Blanket', 'Kitchen Scale', 'Coffee Maker',
        'Knife Set', 'Cast Iron Pan', 'Bed Sheet Set', 'Bathroom Organizer',
    ],
    'Sports': [
        'Yoga Mat Premium', 'Resistance Bands Set', 'Dumbbells 20lb Pair', 'Jump Rope',
        'Foam Roller', 'Water Bottle 32oz', 'Gym Bag', 'Running Belt',
        'Fitness Tracker', 'Tennis Racket', 'Basketball', 'Camping Tent',
    ],
    'Books': [
        'Best Seller Novel', 'Self-Help Guide', 'Cookbook Collection', 'Business Strategy',
        'Sci-Fi Trilogy', 'History Encyclopedia', 'Art & Design Book', 'Travel Guide',
        'Biography Memoir', 'Children Picture Book', 'Poetry Anthology', 'Technical Manual',
    ],
    'Beauty': [
        'Skincare Set', 'Perfume Eau de Parfum', 'Makeup Brush Set', 'Hair Dryer Pro',
        'Face Serum', 'Body Lotion', 'Nail Polish Set', 'Electric Shaver',
        'Facial Cleansing Device', 'Hair Styling Tool', 'Lip Care Kit', 'Sun Protection SPF50',
    ],
}

ORDER_STATUSES = ['pending', 'processing', 'shipped', 'delivered', 'cancelled']
STATUS_WEIGHTS = [0.1, 0.15, 0.2, 0.5, 0.05]

STOCK_STATUSES = ['in_stock', 'low_stock', 'out_of_stock']
LOW_STOCK_THRESHOLD = 20

MONTH_LABELS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


def _iso(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def stock_status_for(stock: int) -> str:
    """재고 수량에서 재고 상태를 유도합니다. 0 -> 품절, 1~19 -> 부족, 20 이상 -> 충분"""
    if stock == 0:
        return 'out_of_stock'
    if stock < LOW_STOCK_THRESHOLD:
        return 'low_stock'
    return 'in_stock'


# --- 엔터티 ---
@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str
    category: str
    price: float
    stock: int
    image_url: str
    total_sales: int
    created_at: datetime

    @property
    def stock_status(self) -> str:
        return stock_status_for(self.stock)

    def to_dict(self):
        data = {k: _iso(v) for k, v in asdict(self).items()}
        data['stock_status'] = self.stock_status
        return data


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    email: str
    avatar: str
    total_orders: int
    total_spent: float
    created_at: datetime
    last_order_at: Optional[datetime] = None

    def to_dict(self):
        return {k: _iso(v) for k, v in asdict(self).items()}


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    product_name: str
    quantity: int
    price: float

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Order:
    id: str
    customer_id: str
    customer_name: str
    customer_email: str
    items: Tuple[OrderItem, ...]
    total: float
    status: str
    created_at: datetime
    updated_at: datetime

    @property
    def is_cancelled(self) -> bool:
        return self.status == 'cancelled'

    def to_dict(self):
        data = {k: _iso(v) for k, v in asdict(self).items() if k != 'items'}
        data['items'] = [item.to_dict() for item in self.items]
        return data


# --- 파생 집계 ---
@dataclass(frozen=True)
class DashboardMetrics:
    total_revenue: float = 0.0
    revenue_growth: float = 0.0
    total_orders: int = 0
    orders_growth: float = 0.0
    total_customers: int = 0
    customers_growth: float = 0.0
    avg_order_value: float = 0.0
    avg_order_value_growth: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class RevenueDataPoint:
    month: str
    month_start: date
    revenue: int
    orders: int

    def to_dict(self):
        return {k: _iso(v) for k, v in asdict(self).items()}


@dataclass(frozen=True)
class CategorySales:
    category: str
    sales: int
    percentage: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class CustomerGrowth:
    month: str
    month_start: date
    new_customers: int
    returning_customers: int

    def to_dict(self):
        return {k: _iso(v) for k, v in asdict(self).items()}


@dataclass(frozen=True)
class DatasetSnapshot:
    """한 번의 생성 결과 전체. 소비자는 읽기 전용으로 다루고 새로고침 시 통째로 교체합니다."""
    products: Tuple[Product, ...]
    customers: Tuple[Customer, ...]
    orders: Tuple[Order, ...]
    metrics: DashboardMetrics
    revenue_series: Tuple[RevenueDataPoint, ...]
    category_sales: Tuple[CategorySales, ...]
    customer_growth: Tuple[CustomerGrowth, ...]
    generated_at: datetime = field(default_factory=datetime.now)

    def counts(self):
        return {
            'products': len(self.products),
            'customers': len(self.customers),
            'orders': len(self.orders),
        }

    def to_dict(self):
        return {
            'products': [p.to_dict() for p in self.products],
            'customers': [c.to_dict() for c in self.customers],
            'orders': [o.to_dict() for o in self.orders],
            'metrics': self.metrics.to_dict(),
            'revenue_series': [r.to_dict() for r in self.revenue_series],
            'category_sales': [c.to_dict() for c in self.category_sales],
            'customer_growth': [g.to_dict() for g in self.customer_growth],
            'generated_at': self.generated_at.isoformat(),
        }
