import logging  # 기본 로깅 모듈
from logging.handlers import TimedRotatingFileHandler  # 시간 기반 로그 분할 핸들러
import os

from app.core.config import LOG_DIR, LOG_LEVEL

LOG_FILE = "app.log"

# 로깅 포맷 설정
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_dir: str = LOG_DIR, level: str = LOG_LEVEL) -> logging.Logger:
    """루트 로거에 파일(자정 분할, 7일 보관) + 콘솔 핸들러를 등록"""
    logger = logging.getLogger()  # 루트 로거 사용
    logger.setLevel(level.upper())

    # 핸들러 중복 등록 방지
    if logger.handlers:
        return logger

    # 로그 디렉토리가 없다면 생성
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = TimedRotatingFileHandler(
        filename=os.path.join(log_dir, LOG_FILE),
        when="midnight",
        interval=1,
        backupCount=7,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
