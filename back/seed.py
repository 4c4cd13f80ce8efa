"""
개발용 샘플 데이터 입력 스크립트

    python seed.py

이메일 기준으로 이미 존재하는 사용자는 건너뛴다.
"""

from datetime import datetime
from sqlalchemy.orm import Session
from database import SessionLocal, init_db
from models.user import User
from models.consultant_profile import ConsultantProfile
from models.enums import UserRole, CategoryEnum
from auth.security import get_password_hash
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="seed")

CLIENT_COUNT = 10

CONSULTANTS = [
    {
        "name": "Dr. Priya Sharma",
        "email": "priya.sharma@example.com",
        "phone": "+919876543210",
        "category": CategoryEnum.CAREER,
        "bio": "15+ years in career counseling and talent development.",
        "experience": "15",
        "qualifications": ["PhD in Organizational Psychology", "Certified Career Coach"],
        "skills": ["Career Planning", "Resume Building", "Interview Preparation"],
        "first_session_price": 99,
        "regular_session_price": 299,
        "is_online": True,
    },
    {
        "name": "Rajesh Kumar",
        "email": "rajesh.kumar@example.com",
        "phone": "+919876543211",
        "category": CategoryEnum.FINANCE,
        "bio": "Expert in investment planning and wealth management.",
        "experience": "12",
        "qualifications": ["CFA Charterholder", "CA from ICAI"],
        "skills": ["Investment Planning", "Tax Planning", "Retirement Planning"],
        "first_session_price": 99,
        "regular_session_price": 399,
        "is_online": False,
    },
    {
        "name": "Dr. Anjali Patel",
        "email": "anjali.patel@example.com",
        "phone": "+919876543212",
        "category": CategoryEnum.WELLNESS,
        "bio": "Holistic wellness coach and mental health expert.",
        "experience": "10",
        "qualifications": ["MD in Psychiatry", "Certified Yoga Instructor"],
        "skills": ["Stress Management", "Meditation", "Lifestyle Coaching"],
        "first_session_price": 99,
        "regular_session_price": 349,
        "is_online": True,
    },
    {
        "name": "Amit Verma",
        "email": "amit.verma@example.com",
        "phone": "+919876543213",
        "category": CategoryEnum.BUSINESS,
        "bio": "Serial entrepreneur and business strategist.",
        "experience": "8",
        "qualifications": ["MBA", "B.Tech"],
        "skills": ["Business Strategy", "Startup Mentoring", "Fundraising"],
        "first_session_price": 99,
        "regular_session_price": 499,
        "is_online": True,
    },
    {
        "name": "Prof. Sarah Johnson",
        "email": "sarah.johnson@example.com",
        "phone": "+919876543214",
        "category": CategoryEnum.EDUCATION,
        "bio": "Education expert in curriculum development and personalized learning.",
        "experience": "20",
        "qualifications": ["PhD in Education", "M.Ed"],
        "skills": ["Study Techniques", "Exam Preparation", "Subject Selection"],
        "first_session_price": 99,
        "regular_session_price": 259,
        "is_online": False,
    },
]


def _get_or_create_user(db: Session, *, email: str, password: str, **fields) -> tuple[User, bool]:
    user = db.query(User).filter(User.email == email).first()
    if user is not None:
        return user, False
    user = User(email=email, hashed_password=get_password_hash(password), **fields)
    db.add(user)
    db.flush()
    return user, True


def seed(db: Session) -> None:
    now = datetime.utcnow()

    admin, created = _get_or_create_user(
        db,
        email="admin@99consultant.com",
        password="admin123",
        name="Admin User",
        role=UserRole.ADMIN,
        email_verified=now,
        phone_verified=True,
        kyc_verified=True,
    )
    logger.info(f"Admin user {'created' if created else 'exists'}: {admin.email}")

    for i in range(1, CLIENT_COUNT + 1):
        _get_or_create_user(
            db,
            email=f"client{i}@example.com",
            password="client123",
            name=f"Client {i}",
            phone=f"+91987654321{i}",
            role=UserRole.CLIENT,
            email_verified=now,
            phone_verified=True,
        )
    logger.info(f"Clients ensured: {CLIENT_COUNT}")

    for data in CONSULTANTS:
        data = dict(data)
        user, created = _get_or_create_user(
            db,
            email=data.pop("email"),
            password="consultant123",
            name=data.pop("name"),
            phone=data.pop("phone"),
            role=UserRole.CONSULTANT,
            email_verified=now,
            phone_verified=True,
            kyc_verified=True,
        )
        if created:
            db.add(
                ConsultantProfile(
                    user_id=user.id,
                    is_approved=True,
                    approval_date=now,
                    profile_completed=True,
                    **data,
                )
            )
    logger.info(f"Consultants ensured: {len(CONSULTANTS)}")

    db.commit()


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
