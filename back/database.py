"""
데이터베이스 설정 및 세션 관리
"""

from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from config.settings import DATABASE_URL, DB_POOL_SIZE, DB_MAX_OVERFLOW


def _engine_options(url: str) -> dict:
    # SQLite(테스트/로컬)는 커넥션 풀 옵션을 지원하지 않음
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,  # 연결 체크
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
    }


# SQLAlchemy 엔진 생성
engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# 세션 로컬
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base 클래스
Base = declarative_base()


def init_db() -> None:
    """모든 모델을 등록한 뒤 테이블 생성"""
    import models.user  # noqa: F401
    import models.consultant_profile  # noqa: F401
    import models.booking  # noqa: F401
    import models.live_session  # noqa: F401
    import models.review  # noqa: F401
    import models.earning  # noqa: F401
    import models.admin_action  # noqa: F401

    Base.metadata.create_all(bind=engine)


# 의존성 주입용 DB 세션
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
