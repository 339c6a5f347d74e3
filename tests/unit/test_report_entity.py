"""Unit tests for the Report entity update protocol."""

import copy
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from app.modules.reports.domain.report_entity import Report
from app.modules.reports.exceptions import (
    FieldNotEditableException,
    InvalidFieldException,
    MandatoryFieldNotFoundException,
)
from tests.helpers import fixed_clock, make_report, make_report_info

HOSTNAME = "acme.example.com"


def _update(report: Report, data: dict, is_patch: bool = True, **overrides) -> None:
    kwargs = {
        "hostname": HOSTNAME,
        "subfolder": None,
        "user_id": 42,
        "user_level": "super_admin",
        "is_datalake_v2_active": False,
        "download_link_enabled": False,
        "is_patch": is_patch,
        "data": data,
    }
    kwargs.update(overrides)
    report.update(**kwargs)


class TestPatchUpdate:
    """Partial updates."""

    def test_patch_applies_and_stamps_last_edit(self) -> None:
        report = make_report()

        _update(report, {"title": "Weekly active users"})

        assert report.info["title"] == "Weekly active users"
        assert report.info["lastEdit"] == "2024-05-06 07:08:09"
        assert report.info["lastEditBy"] == {
            "idUser": 42,
            "firstname": "",
            "lastname": "",
            "username": "",
            "avatar": "",
        }

    def test_last_edit_is_normalized_to_utc(self) -> None:
        clock = fixed_clock(datetime(2024, 5, 6, 9, 8, 9, tzinfo=ZoneInfo("Europe/Rome")))
        report = make_report(clock=clock)

        _update(report, {"title": "Weekly active users"})

        assert report.info["lastEdit"] == "2024-05-06 07:08:09"

    def test_successful_update_replaces_document(self) -> None:
        stored = make_report_info()
        report = make_report(stored)

        _update(report, {"title": "Weekly active users"})

        assert report.info is not stored
        assert stored["title"] == "Active users"

    @pytest.mark.parametrize(
        ("field", "value"),
        [("idReport", "1b3c1a52-5b1f-4c7e-9a3e-2f6b8d4e1a90"), ("author", 99), ("type", "Users - Courses")],
    )
    def test_immutable_field_rejected_and_document_unchanged(self, field: str, value) -> None:
        report = make_report()
        before = report.info
        snapshot = copy.deepcopy(before)

        with pytest.raises(FieldNotEditableException) as exc_info:
            _update(report, {field: value, "title": "Changed"})

        assert exc_info.value.field == field
        assert report.info is before
        assert report.info == snapshot

    def test_platform_change_rejected(self) -> None:
        report = make_report()
        with pytest.raises(InvalidFieldException) as exc_info:
            _update(report, {"platform": "other.example.com"})
        assert exc_info.value.field == "platform"

    def test_post_merge_failure_leaves_document_unchanged(self) -> None:
        report = make_report()
        snapshot = copy.deepcopy(report.info)

        with pytest.raises(InvalidFieldException) as exc_info:
            _update(report, {"title": "Changed", "users": {"all": False}})

        assert exc_info.value.field == "users.all"
        assert report.info == snapshot

    def test_only_first_invalid_field_is_reported(self) -> None:
        report = make_report()
        snapshot = copy.deepcopy(report.info)

        with pytest.raises(InvalidFieldException) as exc_info:
            _update(report, {"visibility": {"type": 99}, "title": 5})

        assert exc_info.value.field == "title"
        assert exc_info.value.message == 'Invalid field "title"'
        assert report.info == snapshot

    def test_activating_planning_requires_recipients(self) -> None:
        report = make_report()
        snapshot = copy.deepcopy(report.info)

        with pytest.raises(MandatoryFieldNotFoundException) as exc_info:
            _update(report, {"planning": {"active": True}})

        assert exc_info.value.field == "planning.option.recipients"
        assert report.info == snapshot

    def test_active_planning_is_stamped_with_caller_location(self) -> None:
        report = make_report()

        _update(
            report,
            {"planning": {"active": True, "option": {"recipients": ["ada@example.com"]}}},
        )

        option = report.info["planning"]["option"]
        assert report.info["planning"]["active"] is True
        assert option["recipients"] == ["ada@example.com"]
        assert option["hostname"] == HOSTNAME
        assert option["subfolder"] == ""

    def test_inactive_planning_is_not_stamped(self) -> None:
        report = make_report()

        _update(report, {"title": "Weekly"}, subfolder="learn")

        assert report.info["planning"]["option"]["hostname"] == ""

    def test_datalake_v2_requires_start_hour(self) -> None:
        info = make_report_info()
        del info["planning"]["option"]["startHour"]
        report = make_report(info)

        with pytest.raises(MandatoryFieldNotFoundException) as exc_info:
            _update(report, {"title": "Weekly"}, is_datalake_v2_active=True)

        assert exc_info.value.field == "planning.option.startHour"


class TestFullReplace:
    """Full replace updates."""

    def test_immutable_fields_in_payload_are_dropped(self) -> None:
        report = make_report()
        data = {
            **make_report_info(),
            "title": "Replaced",
            "author": 99,
            "idReport": "other",
            "lastEditBy": {"idUser": 1},
        }

        _update(report, data, is_patch=False)

        assert report.info["title"] == "Replaced"
        assert report.info["author"] == 12301
        assert report.info["idReport"] == make_report_info()["idReport"]
        assert report.info["lastEditBy"]["idUser"] == 42

    def test_invalid_document_rejected(self) -> None:
        report = make_report()
        snapshot = copy.deepcopy(report.info)

        with pytest.raises(MandatoryFieldNotFoundException) as exc_info:
            _update(report, {"title": ""}, is_patch=False)

        assert exc_info.value.field == "title"
        assert report.info == snapshot

    def test_retrieve_info_data_overlays_editable_fields(self) -> None:
        report = make_report()

        merged = report.retrieve_info_data({"title": "Replaced", "type": "Users - Courses", "extra": 1})

        assert merged["title"] == "Replaced"
        assert merged["type"] == "Users"
        assert merged["extra"] == 1
        assert report.info["title"] == "Active users"

    @pytest.mark.parametrize(
        ("data", "field"),
        [
            ({"fields": 5}, "fields"),
            ({"fields": "user_userid"}, "fields"),
            ({"fields": []}, "fields"),
            (
                {"planning": {"active": True, "option": {"recipients": 7, "startHour": "08:00"}}},
                "planning.option.recipients",
            ),
            (
                {"planning": {"active": True, "option": {"recipients": "ops@example.com"}}},
                "planning.option.recipients",
            ),
        ],
    )
    def test_malformed_mandatory_values_rejected(self, data: dict, field: str) -> None:
        report = make_report()
        snapshot = copy.deepcopy(report.info)

        with pytest.raises(MandatoryFieldNotFoundException) as exc_info:
            _update(report, data, is_patch=False)

        assert exc_info.value.field == field
        assert report.info == snapshot

    def test_malformed_query_builder_filters_are_skipped(self) -> None:
        info = make_report_info(type="Query - Builder", queryBuilderFilters=["not", "a", "map"])
        report = make_report(info)

        _update(report, {"title": "Replaced"}, is_patch=False)

        assert report.info["queryBuilderFilters"] == ["not", "a", "map"]
