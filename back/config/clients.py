#####################################################
#                                                   #
#               클라이언트 의존성 정의                 #
#                                                   #
#####################################################

from config.settings import PAYMENT_GATEWAY, SESSION_BASE_URL
from gateways.payment import PaymentGateway, SimulatedPaymentGateway
from gateways.video import SessionProvider, HostedSessionProvider

# 모든 외부 협력자 인스턴스를 담을 컨테이너 클래스
class ClientContainer:
    def __init__(self):
        self.payment_gateway: PaymentGateway | None = None
        self.session_provider: SessionProvider | None = None

# 클라이언트들을 초기화하는 함수
def initialize_clients() -> ClientContainer:
    container = ClientContainer()

    # 현재 제공되는 결제 게이트웨이는 샌드박스(simulated)뿐
    if PAYMENT_GATEWAY != "simulated":
        raise ValueError(f"Unsupported PAYMENT_GATEWAY: {PAYMENT_GATEWAY}")
    container.payment_gateway = SimulatedPaymentGateway()

    container.session_provider = HostedSessionProvider(SESSION_BASE_URL)

    return container
