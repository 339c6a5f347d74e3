"""Whitelist-driven deep merge of a patch payload into a report document."""

import copy
from dataclasses import dataclass
from typing import Any

from app.modules.reports.constants import DATE_OPTIONS_FILTERS

SIMPLE_FIELDS = (
    "loginRequired",
    "description",
    "title",
    "timezone",
    "fields",
    "conditions",
    "userAdditionalFieldsFilter",
    "loTypes",
)

PLANNING_OPTION_FIELDS = (
    "isPaused",
    "recipients",
    "every",
    "timeFrame",
    "scheduleFrom",
    "hostname",
    "subfolder",
    "startHour",
    "timezone",
)

DATE_OPTION_FIELDS = ("any", "operator", "type", "from", "to", "days")


def default_date_options() -> dict[str, Any]:
    return {"any": True, "days": 1, "type": "", "operator": "", "to": "", "from": ""}


def _child(parent: dict[str, Any], key: str) -> dict[str, Any]:
    """Return ``parent[key]``, creating an empty object when it is not one."""
    if not isinstance(parent.get(key), dict):
        parent[key] = {}
    return parent[key]


@dataclass(frozen=True)
class PatchField:
    """Mergeable fields of one filter sub-document."""

    name: str
    simple_fields: tuple[str, ...]
    info_filter_fields: tuple[str, ...] = ()
    date_filter_fields: tuple[str, ...] = ()


PATCH_FIELDS = (
    PatchField("visibility", ("type",), ("users", "groups", "branches")),
    PatchField("sortingOptions", ("selector", "selectedField", "orderBy")),
    PatchField(
        "users",
        ("all", "hideDeactivated", "showOnlyLearners", "hideExpiredUsers", "isUserAddFields"),
        ("users", "groups", "branches"),
    ),
    PatchField("courses", ("all",), ("courses", "categories", "instructors", "courseType")),
    PatchField("surveys", ("all",), ("surveys",)),
    PatchField("learningPlans", ("all",), ("learningPlans",)),
    PatchField("badges", ("all",), ("badges",)),
    PatchField("assets", ("all",), ("assets", "channels")),
    PatchField("sessions", ("all",), ("sessions",)),
    PatchField("instructors", ("all",), ("instructors",)),
    PatchField(
        "certifications",
        ("all", "activeCertifications", "expiredCertifications", "archivedCertifications", "conditions"),
        ("certifications",),
        ("certificationDate", "certificationExpirationDate"),
    ),
    PatchField(
        "enrollment",
        (
            "completed",
            "inProgress",
            "notStarted",
            "waitingList",
            "suspended",
            "enrollmentsToConfirm",
            "subscribed",
            "overbooking",
            "enrollmentTypes",
        ),
    ),
    PatchField("sessionDates", ("conditions",), (), ("startDate", "endDate")),
    PatchField("externalTrainingStatusFilter", ("approved", "waiting", "rejected")),
    PatchField("publishStatus", ("published", "unpublished")),
    PatchField("sessionAttendanceType", ("blended", "fullOnsite", "fullOnline", "flexible")),
)


class ReportPatch:
    """Merge a sparse patch into a report document, field by field.

    Keys outside the whitelist of their parent object are ignored.
    """

    @staticmethod
    def _patch_simple_fields(info: dict[str, Any], data: dict[str, Any]) -> None:
        for name in SIMPLE_FIELDS:
            if name in data:
                info[name] = copy.deepcopy(data[name])

    @staticmethod
    def _patch_planning(info: dict[str, Any], data: dict[str, Any]) -> None:
        planning_patch = data.get("planning")
        if not isinstance(planning_patch, dict):
            return

        if "active" in planning_patch:
            _child(info, "planning")["active"] = planning_patch["active"]

        option_patch = planning_patch.get("option")
        if not isinstance(option_patch, dict):
            return
        for name in PLANNING_OPTION_FIELDS:
            if name in option_patch:
                _child(_child(info, "planning"), "option")[name] = copy.deepcopy(option_patch[name])

    @staticmethod
    def patch_date_options_filter(
        current: dict[str, Any] | None, data: dict[str, Any] | None
    ) -> dict[str, Any] | None:
        """Merge one date filter, starting from the defaults when none exists."""
        if not isinstance(data, dict):
            return current
        if not isinstance(current, dict):
            current = default_date_options()
        for name in DATE_OPTION_FIELDS:
            if name in data:
                current[name] = data[name]
        return current

    @staticmethod
    def _patch_date_options(info: dict[str, Any], data: dict[str, Any]) -> None:
        for name in DATE_OPTIONS_FILTERS:
            if name in data:
                info[name] = ReportPatch.patch_date_options_filter(info.get(name), data[name])

    @staticmethod
    def _patch_filter(info: dict[str, Any], data: dict[str, Any], patch_field: PatchField) -> None:
        filter_patch = data.get(patch_field.name)
        if not isinstance(filter_patch, dict):
            return

        for name in (*patch_field.simple_fields, *patch_field.info_filter_fields):
            if name in filter_patch:
                _child(info, patch_field.name)[name] = copy.deepcopy(filter_patch[name])

        for name in patch_field.date_filter_fields:
            if name in filter_patch:
                target = _child(info, patch_field.name)
                target[name] = ReportPatch.patch_date_options_filter(target.get(name), filter_patch[name])

    @staticmethod
    def execute(info: dict[str, Any], data: dict[str, Any]) -> dict[str, Any]:
        """Merge ``data`` into ``info`` in place and return ``info``.

        Args:
            info: Report document to update.
            data: Patch payload.

        Returns:
            The same ``info`` object, merged.
        """
        ReportPatch._patch_simple_fields(info, data)
        ReportPatch._patch_planning(info, data)
        ReportPatch._patch_date_options(info, data)
        for patch_field in PATCH_FIELDS:
            ReportPatch._patch_filter(info, data, patch_field)
        return info
