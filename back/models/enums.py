"""
도메인 열거형
"""

import enum


class UserRole(str, enum.Enum):
    CLIENT = "CLIENT"
    CONSULTANT = "CONSULTANT"
    ADMIN = "ADMIN"


class CategoryEnum(str, enum.Enum):
    CAREER = "CAREER"
    EDUCATION = "EDUCATION"
    FINANCE = "FINANCE"
    BUSINESS = "BUSINESS"
    WELLNESS = "WELLNESS"
    TECHNOLOGY = "TECHNOLOGY"
    LEGAL = "LEGAL"
    MARKETING = "MARKETING"
    OTHER = "OTHER"


class BookingType(str, enum.Enum):
    INSTANT = "INSTANT"
    SCHEDULED = "SCHEDULED"


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class SessionStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class EarningStatus(str, enum.Enum):
    PENDING = "PENDING"
    HELD = "HELD"
    PAID = "PAID"


class AdminActionType(str, enum.Enum):
    APPROVE_CONSULTANT = "APPROVE_CONSULTANT"
    REJECT_CONSULTANT = "REJECT_CONSULTANT"
