# config.py
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from errors import InvalidConfigurationError

load_dotenv('.env.local')

# 요청/설정에서 허용하는 키 (camelCase 별칭 포함)
_COUNT_KEYS = {
    'product_count': 'product_count', 'productCount': 'product_count',
    'customer_count': 'customer_count', 'customerCount': 'customer_count',
    'order_count': 'order_count', 'orderCount': 'order_count',
}


def _to_count(name, value):
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} 값이 올바르지 않습니다: {value!r}")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidConfigurationError(f"{name} 값이 정수가 아닙니다: {value!r}") from None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        raise InvalidConfigurationError(f"{name} 값은 0 이상의 정수여야 합니다: {value!r}")
    return value


@dataclass(frozen=True)
class DatasetConfig:
    product_count: int = 100
    customer_count: int = 200
    order_count: int = 500

    def __post_init__(self):
        for name in ('product_count', 'customer_count', 'order_count'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidConfigurationError(f"{name} 값은 0 이상의 정수여야 합니다: {value!r}")

    @classmethod
    def from_mapping(cls, data, base=None):
        """dict(요청 본문 등)에서 설정을 만듭니다. 없는 키는 base(기본값) 값을 씁니다."""
        base = base or cls()
        values = {
            'product_count': base.product_count,
            'customer_count': base.customer_count,
            'order_count': base.order_count,
        }
        for key, value in (data or {}).items():
            target = _COUNT_KEYS.get(key)
            if target:
                values[target] = _to_count(target, value)
        return cls(**values)


def _env_float(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = float(raw)
    except ValueError:
        raise InvalidConfigurationError(f"{name} 값이 숫자가 아닙니다: {raw!r}") from None
    if value < 0:
        raise InvalidConfigurationError(f"{name} 값은 0 이상이어야 합니다: {raw!r}")
    return value


def _env_int(name):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    return _to_count(name, raw)


@dataclass(frozen=True)
class AppConfig:
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    seed: Optional[int] = None
    refresh_delay: float = 0.8
    output_dir: str = "output_data"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        env_counts = {
            'product_count': _env_int('DASHBOARD_PRODUCT_COUNT'),
            'customer_count': _env_int('DASHBOARD_CUSTOMER_COUNT'),
            'order_count': _env_int('DASHBOARD_ORDER_COUNT'),
        }
        dataset = DatasetConfig.from_mapping({k: v for k, v in env_counts.items() if v is not None})

        return cls(
            dataset=dataset,
            seed=_env_int('DASHBOARD_SEED'),
            refresh_delay=_env_float('DASHBOARD_REFRESH_DELAY', 0.8),
            output_dir=os.getenv('OUTPUT_DIR', 'output_data'),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        )
