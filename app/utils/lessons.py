from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Session, col, select

from app.core.errors import NotFoundError, store_errors
from app.models.base import utcnow
from app.models.billing import Billing, BillingSituation
from app.models.lesson import Lesson, LessonStatus
from app.models.performed_service import PerformedService, ServiceType
from app.schemas.billing import BillingRead
from app.schemas.lesson import LessonDetail, LessonRead


def _list(session: Session, statement, take: int, skip: int) -> List[LessonRead]:
    statement = statement.order_by(col(Lesson.date).desc()).offset(skip).limit(take)
    return [LessonRead.model_validate(lesson) for lesson in session.exec(statement).all()]


def _get_or_404(session: Session, lesson_id: str) -> Lesson:
    lesson = session.get(Lesson, lesson_id)
    if lesson is None:
        raise NotFoundError("Lesson not found")
    return lesson


@store_errors("Failed to create the lesson.")
def create_lesson(session: Session, data: Dict[str, Any]) -> LessonRead:
    lesson = Lesson(**data)
    session.add(lesson)
    session.commit()
    session.refresh(lesson)
    return LessonRead.model_validate(lesson)


@store_errors("Failed to create the lesson and its billing.")
def create_lesson_with_billing(session: Session, data: Dict[str, Any], amount: float = 0) -> Dict[str, Any]:
    """Lesson, UNPAYED billing and the LESSON line item, in one transaction.

    The line item is billed to the lesson's customer.
    """
    lesson = Lesson(**data)
    billing = Billing(date=utcnow(), situation=BillingSituation.UNPAYED)
    session.add(lesson)
    session.add(billing)
    session.flush()

    session.add(
        PerformedService(
            billing_id=billing.id,
            user_id=lesson.customer_id,
            service_id=lesson.id,
            amount=amount,
            service_type=ServiceType.LESSON,
        )
    )
    session.commit()
    session.refresh(lesson)
    session.refresh(billing)

    return {
        "lesson": LessonRead.model_validate(lesson),
        "billing": BillingRead.model_validate(billing),
    }


@store_errors("Failed to retrieve the list of lessons.")
def get_all_lessons(session: Session, take: int = 100, skip: int = 0) -> List[LessonRead]:
    return _list(session, select(Lesson), take, skip)


@store_errors("Error retrieving the lesson by id.")
def get_lesson_by_id(session: Session, lesson_id: str) -> Optional[LessonDetail]:
    lesson = session.get(Lesson, lesson_id)
    if lesson is None:
        return None
    return LessonDetail.model_validate(lesson)


@store_errors("Failed to update the lesson.")
def update_lesson(session: Session, lesson_id: str, data: Dict[str, Any]) -> LessonRead:
    lesson = _get_or_404(session, lesson_id)

    for key, value in data.items():
        setattr(lesson, key, value)

    session.add(lesson)
    session.commit()
    session.refresh(lesson)
    return LessonRead.model_validate(lesson)


@store_errors("Failed to update the lesson status.")
def update_lesson_status(session: Session, lesson_id: str, status: LessonStatus) -> LessonRead:
    lesson = _get_or_404(session, lesson_id)
    lesson.status = status

    session.add(lesson)
    session.commit()
    session.refresh(lesson)
    return LessonRead.model_validate(lesson)


@store_errors("Failed to delete the lesson.")
def delete_lesson(session: Session, lesson_id: str) -> LessonDetail:
    """Delete the lesson's performed services, then the lesson, as one transaction."""
    lesson = _get_or_404(session, lesson_id)
    deleted = LessonDetail.model_validate(lesson)

    services = session.exec(
        select(PerformedService).where(PerformedService.service_id == lesson_id)
    ).all()
    for service in services:
        session.delete(service)
    session.flush()

    session.delete(lesson)
    session.commit()
    return deleted


@store_errors("Failed to retrieve lessons by status.")
def get_lessons_by_status(
    session: Session, status: LessonStatus, take: int = 100, skip: int = 0
) -> List[LessonRead]:
    return _list(session, select(Lesson).where(Lesson.status == status), take, skip)


@store_errors("Failed to retrieve lessons by date range.")
def get_lessons_by_date_range(
    session: Session,
    start_date: datetime,
    end_date: datetime,
    take: int = 100,
    skip: int = 0,
) -> List[LessonRead]:
    statement = select(Lesson).where(Lesson.date >= start_date, Lesson.date <= end_date)
    return _list(session, statement, take, skip)


@store_errors("Failed to retrieve lessons for the customer.")
def get_lessons_by_customer_id(
    session: Session, customer_id: str, take: int = 100, skip: int = 0
) -> List[LessonRead]:
    return _list(session, select(Lesson).where(Lesson.customer_id == customer_id), take, skip)


@store_errors("Failed to retrieve lessons for the monitor.")
def get_lessons_by_monitor_id(
    session: Session, monitor_id: str, take: int = 100, skip: int = 0
) -> List[LessonRead]:
    return _list(session, select(Lesson).where(Lesson.monitor_id == monitor_id), take, skip)
