"""
화상 상담 세션 제공자 인터페이스
"""

from abc import ABC, abstractmethod
from config.settings import SESSION_BASE_URL


class SessionProvider(ABC):
    """상담 세션 입장 URL 발급"""

    @abstractmethod
    def issue_session_url(self, session_code: str) -> str:
        ...


class HostedSessionProvider(SessionProvider):
    """외부 호스팅 세션 서비스: base URL 뒤에 세션 코드를 붙인다"""

    def __init__(self, base_url: str = SESSION_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")

    def issue_session_url(self, session_code: str) -> str:
        return f"{self.base_url}/{session_code}"
