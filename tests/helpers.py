"""Helper functions for tests."""

import copy
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from app.modules.reports.domain.report_entity import Report
from app.modules.reports.domain.report_id import ReportId
from app.modules.reports.repositories.report_repository import ReportsRepository

REPORT_ID = "0d3c1a52-5b1f-4c7e-9a3e-2f6b8d4e1a90"
PLATFORM = "acme.example.com"

FILTER_MAP_F1 = '{"f1": {"field": "core_user.userid", "type": "users"}}'


def fixed_clock(moment: datetime | None = None):
    """Clock that always returns the same instant."""
    moment = moment or datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    return lambda: moment


def make_report_info(**overrides: Any) -> dict[str, Any]:
    """Build a report document of type "Users" that passes every check."""
    info: dict[str, Any] = {
        "idReport": REPORT_ID,
        "platform": PLATFORM,
        "type": "Users",
        "title": "Active users",
        "description": "All active users of the platform",
        "author": 12301,
        "creationDate": "2024-01-10 10:00:00",
        "lastEdit": "2024-01-10 10:00:00",
        "lastEditBy": {
            "idUser": 12301,
            "firstname": "Ada",
            "lastname": "Lovelace",
            "username": "ada",
            "avatar": "",
        },
        "standard": False,
        "deleted": False,
        "loginRequired": False,
        "timezone": "Europe/Rome",
        "fields": ["user_userid", "user_firstname", "user_email"],
        "sortingOptions": {"selector": "default", "selectedField": "user_userid", "orderBy": "asc"},
        "visibility": {"type": 1, "users": [], "groups": [], "branches": []},
        "users": {"all": True, "users": [], "groups": [], "branches": []},
        "planning": {
            "active": False,
            "option": {
                "isPaused": False,
                "recipients": [],
                "every": 1,
                "timeFrame": "days",
                "scheduleFrom": "2024-01-15",
                "startHour": "08:00",
                "timezone": "Europe/Rome",
                "hostname": "",
                "subfolder": "",
            },
        },
    }
    info.update(copy.deepcopy(overrides))
    return info


def make_report(info: dict[str, Any] | None = None, clock=None) -> Report:
    report_id = ReportId(REPORT_ID, PLATFORM)
    info = info if info is not None else make_report_info()
    return Report(report_id, info, clock=clock or fixed_clock())


def seed_report(db: Session, info: dict[str, Any] | None = None) -> ReportId:
    """Store a report document and return its id."""
    report = make_report(info)
    ReportsRepository(db).add(report)
    return report.id


CUSTOM_REPORT_TYPE_ID = "7e1f4b2a-9c3d-4e5f-8a6b-1c2d3e4f5a6b"


def make_custom_report_type_info(**overrides: Any) -> dict[str, Any]:
    """Build an inactive custom report type document."""
    info: dict[str, Any] = {
        "id": CUSTOM_REPORT_TYPE_ID,
        "name": "Users by branch",
        "description": "Users with their branch",
        "status": 0,
        "sql": "select idst from core_user",
        "json": "",
        "authorId": 12301,
        "creationDate": "2024-01-10 10:00:00",
        "lastEditBy": 12301,
        "lastEditByDate": "2024-01-10 10:00:00",
        "deleted": False,
    }
    info.update(overrides)
    return info


def seed_query_builder_report(
    db: Session,
    report_id: str,
    title: str,
    query_builder_id: str = CUSTOM_REPORT_TYPE_ID,
    platform: str = PLATFORM,
    deleted: bool = False,
) -> ReportId:
    """Store a "Query - Builder" report built on a custom report type."""
    info = make_report_info(
        idReport=report_id,
        platform=platform,
        type="Query - Builder",
        title=title,
        queryBuilderId=query_builder_id,
        deleted=deleted,
    )
    report = Report(ReportId(report_id, platform), info, clock=fixed_clock())
    ReportsRepository(db).add(report)
    return report.id
