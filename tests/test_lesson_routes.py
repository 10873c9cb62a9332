from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import ANY, MagicMock

import pytest

from app.core.errors import NotFoundError
from app.models.lesson import LessonStatus
from app.routers import lessons
from app.schemas.lesson import LessonSummary


LESSON_ID = "550e8400-e29b-41d4-a716-446655440000"
MONITOR_ID = "f47ac10b-58cc-4372-a567-0e02b2c3d479"
CUSTOMER_ID = "6fa459ea-ee8a-3ca4-894e-db77e160355e"
HORSE_ID = "7d444840-9dc0-11d1-b245-5ffdce74fad2"

VALID_LESSON = {
    "date": "2024-03-15T10:00:00.000Z",
    "desc": "Dressage training",
    "status": "PENDING",
    "monitorId": MONITOR_ID,
    "customerId": CUSTOMER_ID,
    "horseId": HORSE_ID,
}


@pytest.fixture
def lesson_utils(monkeypatch):
    mocks = SimpleNamespace()
    for name in (
        "create_lesson",
        "create_lesson_with_billing",
        "get_all_lessons",
        "get_lesson_by_id",
        "get_lessons_by_customer_id",
        "get_lessons_by_monitor_id",
        "get_lessons_by_status",
        "get_lessons_by_date_range",
        "update_lesson",
        "update_lesson_status",
        "delete_lesson",
    ):
        mock = MagicMock(name=name)
        monkeypatch.setattr(lessons, name, mock)
        setattr(mocks, name, mock)
    return mocks


class TestGet:
    def test_returns_all_lessons_with_default_pagination(self, client, lesson_utils):
        lesson_utils.get_all_lessons.return_value = [{"id": "lesson-1"}]

        r = client.get("/api/lessons")

        lesson_utils.get_all_lessons.assert_called_once_with(ANY, 100, 0)
        assert r.json() == {"success": True, "data": [{"id": "lesson-1"}]}

    def test_rejects_invalid_query_parameters(self, client, lesson_utils):
        r = client.get("/api/lessons?take=0")

        lesson_utils.get_all_lessons.assert_not_called()
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid query parameters"

    def test_rejects_unknown_status(self, client, lesson_utils):
        r = client.get("/api/lessons?status=CANCELLED")

        assert r.status_code == 400
        lesson_utils.get_lessons_by_status.assert_not_called()

    def test_returns_single_lesson_when_id_is_given(self, client, lesson_utils):
        lesson_utils.get_lesson_by_id.return_value = {"id": LESSON_ID}

        r = client.get(f"/api/lessons?id={LESSON_ID}")

        lesson_utils.get_lesson_by_id.assert_called_once_with(ANY, LESSON_ID)
        assert r.json() == {"success": True, "data": {"id": LESSON_ID}}

    def test_returns_404_when_lesson_is_missing(self, client, lesson_utils):
        lesson_utils.get_lesson_by_id.return_value = None

        r = client.get(f"/api/lessons?id={LESSON_ID}")

        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Lesson not found"}

    def test_filters_by_customer(self, client, lesson_utils):
        lesson_utils.get_lessons_by_customer_id.return_value = []

        client.get(f"/api/lessons?customerId={CUSTOMER_ID}&take=20&skip=40")

        lesson_utils.get_lessons_by_customer_id.assert_called_once_with(ANY, CUSTOMER_ID, 20, 40)

    def test_customer_filter_wins_over_monitor_and_status(self, client, lesson_utils):
        lesson_utils.get_lessons_by_customer_id.return_value = []

        client.get(f"/api/lessons?customerId={CUSTOMER_ID}&monitorId={MONITOR_ID}&status=PENDING")

        lesson_utils.get_lessons_by_customer_id.assert_called_once()
        lesson_utils.get_lessons_by_monitor_id.assert_not_called()
        lesson_utils.get_lessons_by_status.assert_not_called()

    def test_filters_by_monitor(self, client, lesson_utils):
        lesson_utils.get_lessons_by_monitor_id.return_value = []

        client.get(f"/api/lessons?monitorId={MONITOR_ID}")

        lesson_utils.get_lessons_by_monitor_id.assert_called_once_with(ANY, MONITOR_ID, 100, 0)

    def test_filters_by_status(self, client, lesson_utils):
        lesson_utils.get_lessons_by_status.return_value = []

        client.get("/api/lessons?status=IN_PROGRESS")

        lesson_utils.get_lessons_by_status.assert_called_once_with(
            ANY, LessonStatus.IN_PROGRESS, 100, 0
        )

    def test_filters_by_date_range(self, client, lesson_utils):
        lesson_utils.get_lessons_by_date_range.return_value = [{"id": "in-range"}]

        r = client.get(
            "/api/lessons?startDate=2024-03-01T00:00:00.000Z&endDate=2024-03-31T23:59:59.000Z"
        )

        lesson_utils.get_lessons_by_date_range.assert_called_once_with(
            ANY,
            datetime(2024, 3, 1, tzinfo=timezone.utc),
            datetime(2024, 3, 31, 23, 59, 59, tzinfo=timezone.utc),
            100,
            0,
        )
        assert r.json()["data"] == [{"id": "in-range"}]

    def test_rejects_start_after_end(self, client, lesson_utils):
        r = client.get(
            "/api/lessons?startDate=2024-04-01T00:00:00.000Z&endDate=2024-03-01T00:00:00.000Z"
        )

        lesson_utils.get_lessons_by_date_range.assert_not_called()
        assert r.status_code == 400
        assert r.json()["error"] == "startDate must be before endDate"

    def test_surfaces_underlying_errors(self, client, lesson_utils):
        lesson_utils.get_all_lessons.side_effect = Exception("explode")

        r = client.get("/api/lessons")

        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "explode"}


class TestPost:
    def test_creates_lesson_when_payload_is_valid(self, client, lesson_utils):
        created = LessonSummary(
            id="lesson-20",
            date=datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc),
            desc="Dressage training",
            status=LessonStatus.PENDING,
        )
        lesson_utils.create_lesson.return_value = created

        r = client.post("/api/lessons", json=VALID_LESSON)

        lesson_utils.create_lesson.assert_called_once_with(
            ANY,
            {
                "date": datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc),
                "desc": "Dressage training",
                "status": LessonStatus.PENDING,
                "monitor_id": MONITOR_ID,
                "customer_id": CUSTOMER_ID,
                "horse_id": HORSE_ID,
            },
        )
        assert r.status_code == 201
        assert r.json() == {
            "success": True,
            "data": {
                "id": "lesson-20",
                "date": "2024-03-15T10:00:00Z",
                "desc": "Dressage training",
                "status": "PENDING",
            },
        }

    def test_status_defaults_to_pending(self, client, lesson_utils):
        lesson_utils.create_lesson.return_value = {}
        body = {k: v for k, v in VALID_LESSON.items() if k != "status"}

        client.post("/api/lessons", json=body)

        _, data = lesson_utils.create_lesson.call_args.args
        assert data["status"] == LessonStatus.PENDING

    def test_rejects_payload_missing_monitor(self, client, lesson_utils):
        body = {k: v for k, v in VALID_LESSON.items() if k != "monitorId"}

        r = client.post("/api/lessons", json=body)

        lesson_utils.create_lesson.assert_not_called()
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid data"
        assert "monitorId" in r.json()["details"]

    def test_rejects_overlong_description(self, client, lesson_utils):
        r = client.post("/api/lessons", json={**VALID_LESSON, "desc": "x" * 1001})

        assert r.status_code == 400
        lesson_utils.create_lesson.assert_not_called()

    def test_handles_create_errors(self, client, lesson_utils):
        lesson_utils.create_lesson.side_effect = Exception("db down")

        r = client.post("/api/lessons", json=VALID_LESSON)

        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "db down"}

    def test_with_billing_passes_amount_separately(self, client, lesson_utils):
        lesson_utils.create_lesson_with_billing.return_value = {"lesson": {"id": "l"}, "billing": {"id": "b"}}

        r = client.post("/api/lessons/with-billing", json={**VALID_LESSON, "amount": 45})

        _, data, amount = lesson_utils.create_lesson_with_billing.call_args.args
        assert "amount" not in data
        assert data["customer_id"] == CUSTOMER_ID
        assert amount == 45
        assert r.status_code == 201
        assert r.json()["data"] == {"lesson": {"id": "l"}, "billing": {"id": "b"}}

    def test_with_billing_rejects_negative_amount(self, client, lesson_utils):
        r = client.post("/api/lessons/with-billing", json={**VALID_LESSON, "amount": -1})

        assert r.status_code == 400
        lesson_utils.create_lesson_with_billing.assert_not_called()


class TestPut:
    def test_updates_lesson_when_payload_is_valid(self, client, lesson_utils):
        lesson_utils.update_lesson.return_value = {"id": LESSON_ID, "desc": "Updated lesson"}

        r = client.put(
            "/api/lessons",
            json={
                "id": LESSON_ID,
                "date": "2024-04-01T09:00:00.000Z",
                "desc": "Updated lesson",
                "status": "IN_PROGRESS",
                "horseId": HORSE_ID,
            },
        )

        lesson_utils.update_lesson.assert_called_once_with(
            ANY,
            LESSON_ID,
            {
                "date": datetime(2024, 4, 1, 9, 0, tzinfo=timezone.utc),
                "desc": "Updated lesson",
                "status": LessonStatus.IN_PROGRESS,
                "horse_id": HORSE_ID,
            },
        )
        assert r.status_code == 200
        assert r.json() == {"success": True, "data": {"id": LESSON_ID, "desc": "Updated lesson"}}

    def test_rejects_invalid_update_payloads(self, client, lesson_utils):
        r = client.put("/api/lessons", json={"id": "nope", "desc": ""})

        lesson_utils.update_lesson.assert_not_called()
        assert r.status_code == 400

    @pytest.mark.parametrize("field", ["date", "desc", "status", "monitorId", "customerId", "horseId"])
    def test_rejects_explicit_null(self, client, lesson_utils, field):
        r = client.put("/api/lessons", json={"id": LESSON_ID, field: None})

        lesson_utils.update_lesson.assert_not_called()
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid data"
        assert field in r.json()["details"]

    def test_converts_offset_dates_to_utc(self, client, lesson_utils):
        lesson_utils.update_lesson.return_value = {"id": LESSON_ID}

        client.put("/api/lessons", json={"id": LESSON_ID, "date": "2024-06-01T09:30:00+02:00"})

        _, _, data = lesson_utils.update_lesson.call_args.args
        assert data["date"] == datetime(2024, 6, 1, 7, 30, tzinfo=timezone.utc)
        assert data["date"].tzinfo == timezone.utc

    def test_returns_404_for_unknown_lesson(self, client, lesson_utils):
        lesson_utils.update_lesson.side_effect = NotFoundError("Lesson not found")

        r = client.put("/api/lessons", json={"id": LESSON_ID, "desc": "x"})

        assert r.status_code == 404

    def test_handles_update_errors(self, client, lesson_utils):
        lesson_utils.update_lesson.side_effect = Exception("nope")

        r = client.put("/api/lessons", json={"id": LESSON_ID, "desc": "x"})

        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "nope"}


class TestPatch:
    def test_updates_lesson_status(self, client, lesson_utils):
        lesson_utils.update_lesson_status.return_value = {"id": LESSON_ID, "status": "FINISHED"}

        r = client.patch("/api/lessons", json={"id": LESSON_ID, "status": "FINISHED"})

        lesson_utils.update_lesson_status.assert_called_once_with(ANY, LESSON_ID, LessonStatus.FINISHED)
        assert r.json() == {
            "success": True,
            "data": {"id": LESSON_ID, "status": "FINISHED"},
            "message": "Lesson status updated to FINISHED",
        }

    def test_rejects_invalid_status_payloads(self, client, lesson_utils):
        r = client.patch("/api/lessons", json={"id": LESSON_ID, "status": "DONE"})

        lesson_utils.update_lesson_status.assert_not_called()
        assert r.status_code == 400

    def test_handles_status_update_errors(self, client, lesson_utils):
        lesson_utils.update_lesson_status.side_effect = Exception("fail")

        r = client.patch("/api/lessons", json={"id": LESSON_ID, "status": "PENDING"})

        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "fail"}


class TestDelete:
    def test_deletes_lesson_when_id_is_valid(self, client, lesson_utils):
        lesson_utils.delete_lesson.return_value = {"id": LESSON_ID}

        r = client.delete(f"/api/lessons?id={LESSON_ID}")

        lesson_utils.delete_lesson.assert_called_once_with(ANY, LESSON_ID)
        assert r.json() == {
            "success": True,
            "data": {"id": LESSON_ID},
            "message": "Lesson deleted successfully",
        }

    def test_rejects_delete_without_valid_id(self, client, lesson_utils):
        r = client.delete("/api/lessons?id=invalid")

        lesson_utils.delete_lesson.assert_not_called()
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid or missing ID"

    def test_handles_delete_errors(self, client, lesson_utils):
        lesson_utils.delete_lesson.side_effect = Exception("nope")

        r = client.delete(f"/api/lessons?id={LESSON_ID}")

        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "nope"}
