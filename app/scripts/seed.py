from datetime import datetime, time, timedelta, timezone
from sqlmodel import Session, select

from app.core.security import get_password_hash
from app.database import create_db_and_tables, engine
import app.models.session  # noqa: F401
import app.models.verification  # noqa: F401
from app.models.account import Account
from app.models.base import utcnow
from app.models.billing import Billing, BillingSituation
from app.models.horse import Horse
from app.models.lesson import Lesson, LessonStatus
from app.models.performed_service import PerformedService, ServiceType
from app.models.user import Role, User


DEFAULT_PASSWORD = "password123"

USERS = [
    dict(first_name="Olivia", last_name="Martens", email="olivia.owner@example.com", phone="+33123450001", role=Role.OWNER, email_verified=True),
    dict(first_name="Marc", last_name="Duval", email="marc.monitor@example.com", phone="+33123450002", role=Role.MONITOR),
    dict(first_name="Ines", last_name="Roche", email="ines.customer@example.com", phone="+33123450003", role=Role.CUSTOMER),
    dict(first_name="Theo", last_name="Lambert", email="theo.admin@example.com", phone="+33123450004", role=Role.ADMIN),
]


def _get_or_create_user(session: Session, data: dict) -> User:
    existing = session.exec(select(User).where(User.email == data["email"])).first()
    if existing:
        return existing

    new_user = User(**data)
    session.add(new_user)
    session.flush()
    session.add(
        Account(
            account_id=new_user.id,
            provider_id="credential",
            user_id=new_user.id,
            password=get_password_hash(DEFAULT_PASSWORD),
        )
    )
    return new_user


def main():
    create_db_and_tables()

    with Session(engine) as session:
        # 1) users with credentials (password123)
        owner, monitor, customer, _admin = [_get_or_create_user(session, data) for data in USERS]

        # 2) a horse for the owner (if none)
        spirit = session.exec(select(Horse).where(Horse.owner_id == owner.id)).first()
        if not spirit:
            spirit = Horse(
                owner_id=owner.id,
                name="Spirit",
                description="Calm gelding, good with beginners",
                color="Bay",
                discipline="Dressage",
                age_years=12,
                height_cm=165,
                weight_kg=520,
            )
            session.add(spirit)
            session.flush()

        # 3) tomorrow 10:00 lesson, billed and unpaid
        tomorrow = (utcnow() + timedelta(days=1)).date()
        lesson_time = datetime.combine(tomorrow, time(10, 0), tzinfo=timezone.utc)

        exists_lesson = session.exec(
            select(Lesson).where(
                Lesson.customer_id == customer.id,
                Lesson.date == lesson_time,
            )
        ).first()

        if not exists_lesson:
            new_lesson = Lesson(
                date=lesson_time,
                desc="Dressage training",
                status=LessonStatus.PENDING,
                customer_id=customer.id,
                monitor_id=monitor.id,
                horse_id=spirit.id,
            )
            new_billing = Billing(date=utcnow(), situation=BillingSituation.UNPAYED)
            session.add(new_lesson)
            session.add(new_billing)
            session.flush()
            session.add(
                PerformedService(
                    billing_id=new_billing.id,
                    user_id=customer.id,
                    service_id=new_lesson.id,
                    amount=45.0,
                    service_type=ServiceType.LESSON,
                )
            )

        session.commit()

        print("Seed done")
        print(f"Owner: {owner.id} ({owner.email})")
        print(f"Monitor: {monitor.id} ({monitor.email})")
        print(f"Customer: {customer.id} ({customer.email})")
        print(f"Password for all seeded users: {DEFAULT_PASSWORD}")


if __name__ == "__main__":
    main()
