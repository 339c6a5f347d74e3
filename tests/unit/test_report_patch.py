"""Unit tests for ReportPatch."""

import copy

from app.modules.reports.patch import ReportPatch, default_date_options
from tests.helpers import make_report_info


def _patched(data: dict, info: dict | None = None) -> dict:
    info = info if info is not None else make_report_info()
    return ReportPatch.execute(copy.deepcopy(info), data)


def test_simple_fields() -> None:
    info = _patched({"title": "Weekly", "fields": ["user_email"], "loTypes": {"video": True}})

    assert info["title"] == "Weekly"
    assert info["fields"] == ["user_email"]
    assert info["loTypes"] == {"video": True}
    assert info["description"] == make_report_info()["description"]


def test_execute_mutates_and_returns_info() -> None:
    info = make_report_info()
    assert ReportPatch.execute(info, {"title": "Weekly"}) is info


def test_unknown_fields_are_ignored() -> None:
    patch = {
        "title": "Weekly",
        "users": {"all": False, "groups": [{"id": 4}]},
        "planning": {"option": {"every": 2}},
    }
    noisy = copy.deepcopy(patch)
    noisy["madeUp"] = {"x": 1}
    noisy["users"]["madeUp"] = True
    noisy["planning"]["madeUp"] = True
    noisy["planning"]["option"]["madeUp"] = "x"

    assert _patched(noisy) == _patched(patch)


def test_immutable_fields_are_not_merged() -> None:
    info = _patched({"author": 1, "idReport": "other", "type": "Users - Courses"})
    assert info == make_report_info()


def test_planning_merge_keeps_other_options() -> None:
    info = _patched({"planning": {"active": True, "option": {"recipients": ["ada@example.com"], "every": 3}}})

    option = info["planning"]["option"]
    assert info["planning"]["active"] is True
    assert option["recipients"] == ["ada@example.com"]
    assert option["every"] == 3
    assert option["timeFrame"] == "days"
    assert option["startHour"] == "08:00"


def test_planning_created_when_missing() -> None:
    info = make_report_info()
    del info["planning"]

    patched = _patched({"planning": {"option": {"startHour": "09:00"}}}, info)

    assert patched["planning"] == {"option": {"startHour": "09:00"}}


def test_new_date_filter_starts_from_defaults() -> None:
    info = _patched({"enrollmentDate": {"any": False, "operator": "isAfter"}})

    assert info["enrollmentDate"] == {**default_date_options(), "any": False, "operator": "isAfter"}


def test_existing_date_filter_is_merged() -> None:
    current = {"any": False, "operator": "range", "type": "range", "from": "2024-01-01", "to": "2024-01-31", "days": 1}
    info = _patched({"completionDate": {"to": "2024-02-29"}}, make_report_info(completionDate=current))

    assert info["completionDate"] == {**current, "to": "2024-02-29"}


def test_nested_date_filter() -> None:
    info = _patched({"certifications": {"all": True, "certificationDate": {"operator": "expiringIn", "days": 30}}})

    assert info["certifications"]["all"] is True
    assert info["certifications"]["certificationDate"] == {
        **default_date_options(),
        "operator": "expiringIn",
        "days": 30,
    }


def test_patch_date_options_filter_without_data_keeps_current() -> None:
    current = {"any": True}
    assert ReportPatch.patch_date_options_filter(current, None) is current


def test_filter_family_merge() -> None:
    info = _patched({"users": {"all": False, "branches": [{"id": 1, "descendants": True}]}})

    assert info["users"] == {
        "all": False,
        "users": [],
        "groups": [],
        "branches": [{"id": 1, "descendants": True}],
    }


def test_filter_family_created_when_missing() -> None:
    info = _patched({"courses": {"all": False, "courses": [{"id": 9}], "courseType": 1}})
    assert info["courses"] == {"all": False, "courses": [{"id": 9}], "courseType": 1}


def test_non_object_parent_is_replaced() -> None:
    info = _patched({"users": {"all": True}}, make_report_info(users=None))
    assert info["users"] == {"all": True}


def test_enrollment_and_status_filters() -> None:
    info = _patched(
        {
            "enrollment": {"completed": True, "enrollmentTypes": 3},
            "externalTrainingStatusFilter": {"approved": True},
            "sessionAttendanceType": {"blended": False},
        }
    )

    assert info["enrollment"] == {"completed": True, "enrollmentTypes": 3}
    assert info["externalTrainingStatusFilter"] == {"approved": True}
    assert info["sessionAttendanceType"] == {"blended": False}


def test_visibility_selection() -> None:
    info = _patched({"visibility": {"type": 3, "groups": [{"id": 2}]}})
    assert info["visibility"] == {"type": 3, "users": [], "groups": [{"id": 2}], "branches": []}


def test_patch_values_are_copied() -> None:
    recipients = ["ada@example.com"]
    info = _patched({"planning": {"option": {"recipients": recipients}}})

    recipients.append("grace@example.com")

    assert info["planning"]["option"]["recipients"] == ["ada@example.com"]
