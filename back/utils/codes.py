"""
사람이 읽을 수 있는 고유 코드 생성 (예약 번호, 세션 ID, 거래 ID)
"""

import secrets
import time

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_code(prefix: str, suffix_length: int = 4) -> str:
    """prefix + base36(밀리초 타임스탬프) + 랜덤 suffix

    예: BK + LXK3Q2AB + 7F2K
    """
    timestamp = to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(suffix_length))
    return f"{prefix}{timestamp}{suffix}"
