#####################################################
#                                                   #
#                앱 상태 정의 및 관리                  #
#                                                   #
#####################################################

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from logs.logging_util import LoggerSingleton
from contextlib import asynccontextmanager
from config.clients import initialize_clients
from config.exception import register_exception_handlers
from database import init_db
from user.router import router as user_router
from consultant.router import router as consultant_router
from category.router import router as category_router
from booking.router import router as booking_router
from payment.router import router as payment_router
from live_session.router import router as live_session_router
from review.router import router as review_router
from earning.router import router as earning_router
from admin.router import router as admin_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"\n{'=' * 80}\n"
        f"| {' ' * 27} 🚀 CONSULTANT MARKETPLACE STARTING 🚀 {' ' * 10} |\n"
        f"{'=' * 80}\n"
    )

    init_db()
    logger.info(
        f"\n{'=' * 80}\n"
        f"| {' ' * 29} 🛢️ DATABASE INITIATED 🛢️ {' ' * 21} |\n"
        f"{'=' * 80}\n"
    )

    # 앱 상태에 외부 협력자(결제 게이트웨이, 세션 제공자) 컨테이너 저장
    app.state.client_container = initialize_clients()

    yield
    # 종료시 클린업 작업은 여기서
    logger.info(
        f"\n{'=' * 80}\n"
        f"| {' ' * 32} 🛑 ENGINE SHUTDOWN 🛑 {' ' * 22} |\n"
        f"{'=' * 80}\n"
    )

# FastAPI 앱 인스턴스 생성
app = FastAPI(title="Consultant Marketplace API", lifespan=lifespan)

# 전역 예외 핸들러 등록
register_exception_handlers(app)

# Prometheus FastAPI 미들웨어 설정
Instrumentator().instrument(app).expose(app)

# 라우터 등록
routers = [
    user_router,
    consultant_router,
    category_router,
    booking_router,
    payment_router,
    live_session_router,
    review_router,
    earning_router,
    admin_router,
]

for router in routers:
    app.include_router(router)

# 로거 설정
logger = LoggerSingleton.get_logger(logger_name="app")
