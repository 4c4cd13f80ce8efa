"""
로깅 유틸리티 - 싱글톤 로거 관리
"""
import logging
import sys
from typing import Optional
from config.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerSingleton:
    """
    싱글톤 패턴의 로거 팩토리
    """
    _loggers = {}

    @classmethod
    def get_logger(cls, logger_name: str = "app", level: Optional[int] = None) -> logging.Logger:
        """
        지정된 이름의 로거를 반환합니다. 이미 생성된 경우 기존 로거를 반환합니다.

        Args:
            logger_name: 로거 이름 (라우터/모듈 단위)
            level: 로그 레벨 (미지정 시 LOG_LEVEL 환경변수)

        Returns:
            logging.Logger: 설정된 로거 인스턴스
        """
        if logger_name in cls._loggers:
            return cls._loggers[logger_name]

        if level is None:
            level = logging.getLevelName(LOG_LEVEL)
            if not isinstance(level, int):
                level = logging.INFO

        logger = logging.getLogger(logger_name)
        logger.setLevel(level)

        # 핸들러가 없는 경우에만 추가 (중복 방지)
        if not logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            logger.addHandler(console_handler)

        cls._loggers[logger_name] = logger
        return logger
