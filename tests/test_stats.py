import pytest
from datetime import date, timedelta
from fastapi import status
from app.core.config import settings
from app.services import stats as stats_service
from app.models.work_entry import WorkEntryStatus
from app.core.date_filters import utc_today
from conftest import auth, add_entry


class TestOrganizationStats:
    """Organization view for HR and managers"""

    def test_no_entries(self, client, hr_token, employee_user):
        response = client.get("/stats", headers=auth(hr_token))
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "total_employees": 1,
            "total_entries": 0,
            "total_hours": 0,
            "avg_hours": 0,
            "submitted_today": 0,
            "not_submitted_today": 1,
        }

    def test_totals(self, client, db_session, manager_token, employee_user, other_employee):
        today = utc_today()
        add_entry(db_session, employee_user, today, hours="8")
        add_entry(db_session, other_employee, today - timedelta(days=1), hours="4.5")

        data = client.get("/stats", headers=auth(manager_token)).json()
        assert data["total_employees"] == 2
        assert data["total_entries"] == 2
        assert data["total_hours"] == 12.5
        assert data["avg_hours"] == 6.2
        assert data["submitted_today"] == 1
        assert data["not_submitted_today"] == 1

    def test_not_submitted_never_negative(self, db_session, employee_user, hr_user, manager_user):
        today = utc_today()
        add_entry(db_session, hr_user, today)
        add_entry(db_session, manager_user, today)

        stats = stats_service.organization_stats(db_session, today)
        assert stats.total_employees == 1
        assert stats.submitted_today == 2
        assert stats.not_submitted_today == 0


class TestEmployeeStats:
    """Personal rollup for employees"""

    def test_employee_view(self, client, db_session, employee_token, employee_user):
        add_entry(db_session, employee_user, utc_today(), hours="7.25")

        response = client.get("/stats", headers=auth(employee_token))
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["today_hours"] == 7.2
        assert data["status"] == "On Track"
        assert "total_employees" not in data

    def test_week_starts_on_sunday_by_default(self, db_session, employee_user):
        wednesday = date(2024, 1, 17)
        add_entry(db_session, employee_user, date(2024, 1, 17), hours="2")
        add_entry(db_session, employee_user, date(2024, 1, 14), hours="3")  # Sunday
        add_entry(db_session, employee_user, date(2024, 1, 13), hours="4")  # Saturday
        add_entry(db_session, employee_user, date(2023, 12, 31), hours="5")

        stats = stats_service.employee_stats(db_session, employee_user.id, today=wednesday)
        assert stats.today_hours == 2
        assert stats.week_hours == 5
        assert stats.month_hours == 9

    def test_monday_week_start(self, db_session, employee_user, monkeypatch):
        monkeypatch.setattr(settings, "STATS_WEEK_START", "monday")
        add_entry(db_session, employee_user, date(2024, 1, 17), hours="2")
        add_entry(db_session, employee_user, date(2024, 1, 14), hours="3")

        stats = stats_service.employee_stats(db_session, employee_user.id, today=date(2024, 1, 17))
        assert stats.week_hours == 2

    def test_only_own_entries_counted(self, db_session, employee_user, other_employee):
        today = utc_today()
        add_entry(db_session, other_employee, today, hours="6")

        assert stats_service.employee_stats(db_session, employee_user.id).today_hours == 0


class TestManagerDashboard:
    def test_counts_employee_accounts_only(self, client, db_session, manager_token, manager_user, employee_user, other_employee):
        today = utc_today()
        add_entry(db_session, employee_user, today, hours="8")
        add_entry(db_session, manager_user, today, hours="2")
        add_entry(db_session, other_employee, today - timedelta(days=1), hours="6", entry_status=WorkEntryStatus.APPROVED)

        response = client.get("/stats/manager-dashboard", headers=auth(manager_token))
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "total_employees": 2,
            "submitted": 1,
            "not_submitted": 1,
            "total_work_hours": 10,
        }

    def test_forbidden_for_hr(self, client, hr_token):
        response = client.get("/stats/manager-dashboard", headers=auth(hr_token))
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestReportingRoster:
    def test_hr_sees_all_employees(self, client, hr_token, employee_user, other_employee, manager_user):
        response = client.get("/reports/employees", headers=auth(hr_token))
        assert response.status_code == status.HTTP_200_OK
        assert [u["username"] for u in response.json()] == ["jane.roe", "john.doe"]

    def test_manager_without_preferences_sees_all(self, client, manager_token, employee_user, other_employee):
        response = client.get("/reports/employees", headers=auth(manager_token))
        assert len(response.json()) == 2

    def test_manager_selection_drops_unknown_ids(self, client, manager_token, employee_user, other_employee):
        client.post(
            "/manager-preferences",
            headers=auth(manager_token),
            json={"selected_employee_ids": [other_employee.id, "no-such-user"]}
        )

        response = client.get("/reports/employees", headers=auth(manager_token))
        assert [u["id"] for u in response.json()] == [other_employee.id]

    def test_employee_forbidden(self, client, employee_token):
        response = client.get("/reports/employees", headers=auth(employee_token))
        assert response.status_code == status.HTTP_403_FORBIDDEN
