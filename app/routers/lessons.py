import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status
from pydantic import ValidationError
from sqlmodel import Session

from app.core.errors import NotFoundError
from app.core.responses import failure, server_error, success
from app.database import get_session
from app.schemas.common import IdParam, error_details, query_params
from app.schemas.lesson import (
    LessonCreate,
    LessonQuery,
    LessonStatusUpdate,
    LessonUpdate,
    LessonWithBillingCreate,
)
from app.utils.lessons import (
    create_lesson,
    create_lesson_with_billing,
    delete_lesson,
    get_all_lessons,
    get_lesson_by_id,
    get_lessons_by_customer_id,
    get_lessons_by_date_range,
    get_lessons_by_monitor_id,
    get_lessons_by_status,
    update_lesson,
    update_lesson_status,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


# =========================
# LIST / FETCH
# precedence: id > customerId > monitorId > status > startDate+endDate > all
# =========================
@router.get("")
def list_lessons(request: Request, session: Session = Depends(get_session)):
    try:
        params = LessonQuery.model_validate(query_params(request.query_params))
    except ValidationError as exc:
        return failure("Invalid query parameters", 400, details=error_details(exc))

    try:
        if params.id:
            lesson = get_lesson_by_id(session, params.id)
            if lesson is None:
                return failure("Lesson not found", 404)
            return success(lesson)

        if params.customer_id:
            lessons = get_lessons_by_customer_id(session, params.customer_id, params.take, params.skip)
        elif params.monitor_id:
            lessons = get_lessons_by_monitor_id(session, params.monitor_id, params.take, params.skip)
        elif params.status:
            lessons = get_lessons_by_status(session, params.status, params.take, params.skip)
        elif params.start_date and params.end_date:
            if params.start_date > params.end_date:
                return failure("startDate must be before endDate", 400)
            lessons = get_lessons_by_date_range(
                session, params.start_date, params.end_date, params.take, params.skip
            )
        else:
            lessons = get_all_lessons(session, params.take, params.skip)

        return success(lessons)
    except Exception as exc:
        logger.exception("GET /api/lessons error")
        return server_error(exc)


# =========================
# CREATE
# =========================
@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = LessonCreate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        lesson = create_lesson(session, data.model_dump())
        return success(lesson, status.HTTP_201_CREATED)
    except Exception as exc:
        logger.exception("POST /api/lessons error")
        return server_error(exc)


@router.post("/with-billing", status_code=status.HTTP_201_CREATED)
def create_with_billing(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    """Lesson and its billing line in a single transaction."""
    try:
        data = LessonWithBillingCreate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        result = create_lesson_with_billing(session, data.model_dump(exclude={"amount"}), data.amount)
        return success(result, status.HTTP_201_CREATED)
    except Exception as exc:
        logger.exception("POST /api/lessons/with-billing error")
        return server_error(exc)


# =========================
# UPDATE
# =========================
@router.put("")
def update(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = LessonUpdate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        lesson = update_lesson(session, data.id, data.model_dump(exclude_unset=True, exclude={"id"}))
        return success(lesson)
    except NotFoundError as exc:
        return failure(str(exc), 404)
    except Exception as exc:
        logger.exception("PUT /api/lessons error")
        return server_error(exc)


@router.patch("")
def update_status(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    session: Session = Depends(get_session),
):
    try:
        data = LessonStatusUpdate.model_validate(payload or {})
    except ValidationError as exc:
        return failure("Invalid data", 400, details=error_details(exc))

    try:
        lesson = update_lesson_status(session, data.id, data.status)
        return success(lesson, message=f"Lesson status updated to {data.status.value}")
    except NotFoundError as exc:
        return failure(str(exc), 404)
    except Exception as exc:
        logger.exception("PATCH /api/lessons error")
        return server_error(exc)


# =========================
# DELETE
# =========================
@router.delete("")
def delete(request: Request, session: Session = Depends(get_session)):
    try:
        params = IdParam.model_validate(query_params(request.query_params))
    except ValidationError as exc:
        return failure("Invalid or missing ID", 400, details=error_details(exc))

    try:
        lesson = delete_lesson(session, params.id)
        return success(lesson, message="Lesson deleted successfully")
    except NotFoundError as exc:
        return failure(str(exc), 404)
    except Exception as exc:
        logger.exception("DELETE /api/lessons error")
        return server_error(exc)
