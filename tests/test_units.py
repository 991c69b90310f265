"""Unit tests for helpers that do not need the HTTP stack."""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
import resend
from sqlalchemy import select
from starlette.requests import Request

from app.api.v1.tools import guess_image_type
from app.config import get_settings
from app.dependencies import current_principal, require_super_admin_user
from app.exceptions import ForbiddenException, InvalidInputException, UnauthorizedException
from app.middleware.auth import AuthMiddleware
from app.models import CronJobLog
from app.models.cron_job_log import CronJobStatus
from app.models.system_settings import SettingKey
from app.models.user import Capability, Role, role_has_capability
from app.schemas.dashboard import DashboardItemUpdate
from app.schemas.settings import LegalDocumentType
from app.schemas.support import SupportRequestType
from app.services.cron_log_service import CronLogService
from app.services.email_service import EmailService
from app.services.stats_service import recent_months
from app.utils.permissions import PermissionChecker, check_capability
from app.utils.request_context import (
    clear_all_context,
    get_current_user_id_or_none,
    get_current_user_role,
    set_current_user_id,
    set_current_user_role,
)
from app.utils.security import create_access_token
from app.utils.validation import (
    clamp_pagination,
    has_more,
    is_icon_url,
    is_valid_email,
    parse_choice,
)


class TestPagination:
    @pytest.mark.parametrize(
        "limit,offset,expected",
        [
            (None, None, (100, 0)),
            (50, 10, (50, 10)),
            (0, 0, (1, 0)),
            (-3, -5, (1, 0)),
            (10_000, 20, (500, 20)),
        ],
    )
    def test_clamp(self, limit, offset, expected):
        assert clamp_pagination(limit, offset) == expected

    def test_clamp_custom_bounds(self):
        assert clamp_pagination(None, None, default_limit=50, max_limit=200) == (50, 0)
        assert clamp_pagination(999, 0, default_limit=50, max_limit=200) == (200, 0)

    def test_has_more(self):
        assert has_more(total=30, limit=10, offset=10) is True
        assert has_more(total=20, limit=10, offset=10) is False
        assert has_more(total=0, limit=10, offset=0) is False


class TestInputChecks:
    @pytest.mark.parametrize(
        "value,valid",
        [
            ("sam@example.com", True),
            ("a.b+c@mail.example.org", True),
            ("sam@example", False),
            ("sam example@example.com", False),
            ("@example.com", False),
            ("", False),
        ],
    )
    def test_email(self, value, valid):
        assert is_valid_email(value) is valid

    @pytest.mark.parametrize(
        "value,is_url",
        [
            ("https://cdn.example.com/a.svg", True),
            ("http://cdn.example.com/a.svg", True),
            ("/static/icons/a.svg", True),
            ("Utensils", False),
            ("shopping-cart", False),
        ],
    )
    def test_icon_url(self, value, is_url):
        assert is_icon_url(value) is is_url

    def test_parse_choice(self):
        assert parse_choice("type", "privacy", LegalDocumentType) is LegalDocumentType.PRIVACY

    @pytest.mark.parametrize("value", [None, "", "cookies"])
    def test_parse_choice_rejects(self, value):
        with pytest.raises(InvalidInputException) as exc_info:
            parse_choice("type", value, LegalDocumentType)
        assert exc_info.value.message == "type must be one of: terms, privacy"
        assert exc_info.value.status_code == 400


class TestRoles:
    @pytest.mark.parametrize(
        "role,capability,granted",
        [
            (Role.SUPER_ADMIN, Capability.MANAGE_PLATFORM, True),
            (Role.SUPER_ADMIN, Capability.USE_TOOLS, True),
            ("admin", Capability.MANAGE_PLATFORM, False),
            ("admin", Capability.USE_TOOLS, True),
            ("guest", Capability.USE_TOOLS, True),
            ("owner", Capability.USE_TOOLS, False),
            (None, Capability.USE_TOOLS, False),
        ],
    )
    def test_role_has_capability(self, role, capability, granted):
        assert role_has_capability(role, capability) is granted

    def test_permission_checker(self):
        assert PermissionChecker("superadmin").can(Capability.MANAGE_PLATFORM)
        assert not PermissionChecker("admin").can(Capability.MANAGE_PLATFORM)
        assert PermissionChecker("admin").can(Capability.USE_TOOLS)
        assert not PermissionChecker("bogus").can(Capability.USE_TOOLS)


class TestPrincipalDependencies:
    @pytest.fixture(autouse=True)
    def _clean_context(self):
        clear_all_context()
        yield
        clear_all_context()

    async def test_no_session(self):
        with pytest.raises(UnauthorizedException):
            await current_principal()
        with pytest.raises(UnauthorizedException):
            await require_super_admin_user()

    async def test_missing_capability(self):
        set_current_user_id(uuid.uuid4())
        set_current_user_role(Role.ADMIN.value)
        with pytest.raises(ForbiddenException):
            await require_super_admin_user()

    async def test_unknown_role_is_forbidden(self):
        set_current_user_id(uuid.uuid4())
        set_current_user_role("owner")
        with pytest.raises(ForbiddenException):
            await current_principal()

    async def test_returns_user_id(self):
        user_id = uuid.uuid4()
        set_current_user_id(user_id)
        set_current_user_role(Role.SUPER_ADMIN.value)
        assert await require_super_admin_user() == user_id
        assert check_capability(Capability.USE_TOOLS) == user_id


class TestRecentMonths:
    def test_twelve_months_ending_now(self):
        months = recent_months(datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc))
        assert len(months) == 12
        assert months[0] == datetime(2025, 11, 1, tzinfo=timezone.utc)
        assert months[-1] == datetime(2026, 10, 1, tzinfo=timezone.utc)

    def test_year_rollover(self):
        months = recent_months(datetime(2026, 2, 3, tzinfo=timezone.utc), count=3)
        assert [m.strftime("%b %Y") for m in months] == ["Dec 2025", "Jan 2026", "Feb 2026"]


class TestCronLogService:
    async def test_record(self, db):
        log_id = await CronLogService().record_cron_job(
            db, "cleanup", CronJobStatus.WARNING, message="Nothing to clean"
        )
        assert log_id is not None

        row = (
            await db.execute(
                select(CronJobLog.job_name, CronJobLog.status, CronJobLog.duration_ms).where(
                    CronJobLog.id == log_id
                )
            )
        ).one()
        assert row.job_name == "cleanup"
        assert row.status == "warning"
        assert row.duration_ms >= 0

    async def test_execute_success(self, db):
        async def job():
            return {"processed": 3}

        result = await CronLogService().execute_with_logging(db, "reminders", job)
        assert result == {"processed": 3}

        row = (
            await db.execute(select(CronJobLog.status, CronJobLog.message, CronJobLog.execution_data))
        ).one()
        assert row.status == "success"
        assert row.message == "Job completed successfully"
        assert row.execution_data["processed"] == 3
        assert "started_at" in row.execution_data

    async def test_execute_failure_reraises(self, db):
        async def job():
            raise RuntimeError("mail server unreachable")

        with pytest.raises(RuntimeError):
            await CronLogService().execute_with_logging(db, "reminders", job)

        row = (
            await db.execute(select(CronJobLog.status, CronJobLog.message, CronJobLog.error_details))
        ).one()
        assert row.status == "error"
        assert row.message == "Job execution failed"
        assert row.error_details == "mail server unreachable"


class TestEnumsAndSchemas:
    def test_support_labels(self):
        assert SupportRequestType.QUESTION.label == "Question"
        assert SupportRequestType.SUPPORT.label == "Support Request"
        assert SupportRequestType.FEATURE.label == "Feature Recommendation"

    def test_legal_setting_keys(self):
        assert LegalDocumentType.TERMS.setting_key is SettingKey.TERMS_OF_SERVICE
        assert LegalDocumentType.PRIVACY.setting_key is SettingKey.PRIVACY_POLICY

    def test_update_changes_only_sent_fields(self):
        update = DashboardItemUpdate.model_validate({"status": "completed", "due_date": None})
        assert update.changes() == {"status": "completed", "due_date": None}

    def test_update_rejects_null_title(self):
        with pytest.raises(ValueError):
            DashboardItemUpdate.model_validate({"title": None})

    @pytest.mark.parametrize(
        "data,media_type",
        [
            (b"\x89PNG\r\n\x1a\n...", "image/png"),
            (b"GIF89a...", "image/gif"),
            (b"RIFF....WEBP", "image/webp"),
            (b"<svg xmlns='http://www.w3.org/2000/svg'/>", "image/svg+xml"),
            (b"\xff\xd8\xff\xe0", "image/jpeg"),
        ],
    )
    def test_guess_image_type(self, data, media_type):
        assert guess_image_type(data) == media_type


class TestAuthMiddleware:
    @pytest.fixture(autouse=True)
    def _clean_context(self):
        clear_all_context()
        yield
        clear_all_context()

    def _request(self, token: str) -> Request:
        return Request(
            {
                "type": "http",
                "scheme": "http",
                "method": "GET",
                "path": "/api/v1/dashboard/items",
                "query_string": b"",
                "headers": [(b"authorization", f"Bearer {token}".encode())],
            }
        )

    async def test_context_cleared_when_handler_raises(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, role=Role.ADMIN.value)
        middleware = AuthMiddleware(AsyncMock())

        async def call_next(request):
            assert get_current_user_id_or_none() == user_id
            raise RuntimeError("handler crashed")

        with pytest.raises(RuntimeError):
            await middleware.dispatch(self._request(token), call_next)

        assert get_current_user_id_or_none() is None
        assert get_current_user_role() is None


class TestEmailService:
    @pytest.fixture
    def resend_service(self) -> EmailService:
        config = get_settings().model_copy(
            update={"email_provider": "resend", "resend_api_key": "re_test"}
        )
        return EmailService(config)

    async def test_resend_call_runs_off_the_event_loop(self, resend_service):
        with patch(
            "app.services.email_service.asyncio.to_thread",
            new=AsyncMock(return_value={"id": "email-1"}),
        ) as to_thread:
            message_id = await resend_service.send_support_request(
                SupportRequestType.SUPPORT,
                name="Sam",
                email="sam@example.com",
                subject="Broken link",
                message="The recipes page 404s.",
            )

        assert message_id == "email-1"
        func, params = to_thread.call_args.args
        assert func is resend.Emails.send
        assert params["to"] == [resend_service.config.support_inbox_address]
        assert params["subject"] == "[Support Request] Broken link"
        assert params["reply_to"] == "sam@example.com"
        assert "The recipes page 404s." in params["html"]

    async def test_provider_failure_returns_none(self, resend_service):
        with patch(
            "app.services.email_service.asyncio.to_thread",
            new=AsyncMock(side_effect=RuntimeError("resend down")),
        ):
            message_id = await resend_service.send_support_request(
                SupportRequestType.QUESTION,
                name="Sam",
                email="sam@example.com",
                subject="Hello",
                message="Hi there",
            )

        assert message_id is None
