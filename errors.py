# errors.py


class DashboardDataError(Exception):
    """대시보드 데이터 계층의 기본 예외"""


class InvalidConfigurationError(DashboardDataError, ValueError):
    """잘못된 생성 설정 (음수 개수, 빈 풀, 가중치 불일치 등)"""


class DataLoadError(DashboardDataError):
    """데이터 새로고침 실패. message는 사용자에게 그대로 노출됩니다."""

    def __init__(self, message="Failed to load data. Please try again."):
        super().__init__(message)
        self.message = message
