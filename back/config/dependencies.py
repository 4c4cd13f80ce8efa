#####################################################
#                                                   #
#                의존성 주입 함수 정의                 #
#                                                   #
#####################################################

from fastapi import Request
from gateways.payment import PaymentGateway
from gateways.video import SessionProvider

##### 클라이언트 의존성 주입 함수 정의 #####
# app.py lifespan 에서 초기화된 클라이언트를 반환
# Depends를 위한 헬퍼 함수

# 결제 게이트웨이
def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.client_container.payment_gateway

# 화상 세션 제공자
def get_session_provider(request: Request) -> SessionProvider:
    return request.app.state.client_container.session_provider
