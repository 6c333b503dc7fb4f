# random_utils.py
import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Protocol, Sequence, TypeVar

from errors import InvalidConfigurationError

T = TypeVar('T')

ID_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'
ID_LENGTH = 9


class RandomSource(Protocol):
    """[0, 1) 균등 실수를 돌려주는 난수원. random.Random 이 그대로 맞습니다."""

    def random(self) -> float: ...


def random_int(rng: RandomSource, min_value: int, max_value: int) -> int:
    """[min_value, max_value] 구간(양끝 포함)의 균등 정수"""
    return math.floor(rng.random() * (max_value - min_value + 1)) + min_value


def pick_uniform(rng: RandomSource, items: Sequence[T]) -> T:
    if not items:
        raise InvalidConfigurationError("빈 풀에서 값을 뽑을 수 없습니다.")
    return items[random_int(rng, 0, len(items) - 1)]


def weighted_choice(rng: RandomSource, labels: Sequence[T], weights: Sequence[float]) -> T:
    """
    누적 가중치를 선언 순서대로 훑어 첫 번째로 난수를 넘는 라벨을 고릅니다.
    가중치 합이 1.0에 못 미쳐 난수가 끝까지 남으면 마지막 라벨을 돌려줍니다.
    """
    if not labels:
        raise InvalidConfigurationError("라벨 목록이 비어 있습니다.")
    if len(labels) != len(weights):
        raise InvalidConfigurationError(
            f"라벨({len(labels)})과 가중치({len(weights)}) 개수가 다릅니다."
        )

    draw = rng.random()
    cumulative = 0.0
    for label, weight in zip(labels, weights):
        cumulative += weight
        if draw < cumulative:
            return label
    return labels[-1]


def generate_id(rng: RandomSource, length: int = ID_LENGTH) -> str:
    return ''.join(
        ID_ALPHABET[random_int(rng, 0, len(ID_ALPHABET) - 1)] for _ in range(length)
    )


# --- 달력 월 계산 ---
def month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def add_months(moment: datetime, months: int) -> datetime:
    """moment 가 속한 달에서 months 만큼 이동한 달의 1일 00:00"""
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    return month_start(moment).replace(year=year, month=month + 1)


def random_date_within(rng: RandomSource, months_ago: int, now: datetime) -> datetime:
    """(now 기준 months_ago 달 전 1일) ~ now 사이의 균등 시각"""
    past = add_months(now, -months_ago)
    return past + (now - past) * rng.random()


def round_half_up(value: float, places: int = 2) -> float:
    # 사사오입 (ROUND_HALF_UP)
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
