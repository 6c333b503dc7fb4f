# data_service.py
import logging
import random
import threading
import time
from datetime import datetime

from config import AppConfig
from dataset import generate_dataset
from errors import DataLoadError

logger = logging.getLogger(__name__)


class DataService:
    """
    현재 스냅샷을 보관하고 새로고침을 담당합니다.

    새로고침은 지연(네트워크 흉내) 후 새 스냅샷을 만들어 참조를 통째로 교체합니다.
    동시에 하나만 실행되며, 진행 중에 들어온 요청은 새로 생성하지 않고
    진행 중인 새로고침의 결과를 돌려받습니다.
    """

    def __init__(self, config=None, rng=None):
        self.config = config or AppConfig()
        self._rng = rng or random.Random(self.config.seed)
        self._lock = threading.Lock()
        self._snapshot = None
        self.loading = False
        self.error = None
        self.last_refreshed = None

    @property
    def snapshot(self):
        return self._snapshot

    def refresh(self, dataset_config=None):
        if not self._lock.acquire(blocking=False):
            logger.warning("새로고침이 이미 진행 중입니다. 진행 중인 결과를 기다립니다.")
            with self._lock:
                if self.error:
                    raise DataLoadError(self.error)
                return self._snapshot

        try:
            self.loading = True
            self.error = None
            dataset_config = dataset_config or self.config.dataset
            logger.info("데이터 새로고침 시작: %s", dataset_config)

            if self.config.refresh_delay > 0:
                time.sleep(self.config.refresh_delay)

            try:
                snapshot = generate_dataset(dataset_config, rng=self._rng)
            except Exception as e:
                logger.exception("데이터 생성 실패")
                failure = DataLoadError()
                self.error = failure.message
                raise failure from e

            self._snapshot = snapshot
            self.last_refreshed = datetime.now()
            logger.info("데이터 새로고침 완료: %s", snapshot.counts())
            return snapshot
        finally:
            self.loading = False
            self._lock.release()

    def get_snapshot(self):
        """스냅샷이 없으면 첫 새로고침을 수행합니다."""
        if self._snapshot is None:
            return self.refresh()
        return self._snapshot

    def clear(self):
        with self._lock:
            self._snapshot = None
            self.error = None
            self.last_refreshed = None

    def status(self):
        return {
            'loading': self.loading,
            'error': self.error,
            'has_data': self._snapshot is not None,
            'last_refreshed': self.last_refreshed.isoformat() if self.last_refreshed else None,
        }
