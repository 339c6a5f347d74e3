"""Detect which parts of a report changed between two document versions.

Values are compared after normalising unset values: a missing or empty
string equals ``""``, a missing or false boolean equals ``False`` and a
missing or zero number equals ``0``.
"""

import json
from typing import Any

from app.modules.reports.constants import DATE_OPTIONS_FILTERS, ReportsTypes as T, VisibilityTypes

VISIBILITY_RULE_LABELS = {
    VisibilityTypes.ALL_GODADMINS_AND_PU: "All Superadmins and Power Users",
    VisibilityTypes.ALL_GODADMINS_AND_SELECTED_PU: "All Superadmins and some selected Power Users",
}
DEFAULT_VISIBILITY_RULE_LABEL = "All Superadmins"

_UNSET = object()


def _get(document: Any, key: str) -> Any:
    if isinstance(document, dict) and document.get(key) is not None:
        return document[key]
    return _UNSET


def string_changed(before: Any, after: Any) -> bool:
    if before is _UNSET and after is _UNSET:
        return False
    return (before if before is not _UNSET and before else "") != (
        after if after is not _UNSET and after else ""
    )


def boolean_changed(before: Any, after: Any) -> bool:
    return bool(before is not _UNSET and before) != bool(after is not _UNSET and after)


def number_changed(before: Any, after: Any) -> bool:
    if before is _UNSET and after is _UNSET:
        return False
    return (before if before is not _UNSET and before else 0) != (
        after if after is not _UNSET and after else 0
    )


def _identity(value: Any) -> str:
    """Hashable form of any JSON value."""
    return json.dumps(value, sort_keys=True, default=str)


def _selection_id(item: Any) -> str:
    return _identity(item.get("id") if isinstance(item, dict) else item)


def selection_changed(before: Any, after: Any) -> bool:
    """Compare two ``{id, descendants?}`` selections regardless of order."""
    before = [] if before is _UNSET else before
    after = [] if after is _UNSET else after
    if not isinstance(before, list) or not isinstance(after, list):
        return before != after
    if len(before) != len(after):
        return True
    after_by_id = {_selection_id(item): item for item in after}
    for item in before:
        other = after_by_id.get(_selection_id(item), _UNSET)
        if other is _UNSET:
            return True
        if boolean_changed(_get(item, "descendants"), _get(other, "descendants")):
            return True
    return False


def _appeared_or_vanished(before: Any, after: Any) -> bool | None:
    """Decide the trivial cases; None means both sides must be compared."""
    if before is _UNSET and after is _UNSET:
        return False
    if before is _UNSET or after is _UNSET:
        return True
    return None


def date_options_changed(before: Any, after: Any) -> bool:
    trivial = _appeared_or_vanished(before, after)
    if trivial is not None:
        return trivial
    return (
        boolean_changed(_get(before, "any"), _get(after, "any"))
        or any(
            string_changed(_get(before, key), _get(after, key))
            for key in ("operator", "type", "from", "to")
        )
        or number_changed(_get(before, "days"), _get(after, "days"))
    )


def _limits_changed(before: Any, after: Any, keys: tuple[str, ...]) -> bool:
    trivial = _appeared_or_vanished(before, after)
    if trivial is not None:
        return trivial
    if not isinstance(before, dict) or not isinstance(after, dict):
        return number_changed(before, after)
    return any(number_changed(_get(before, key), _get(after, key)) for key in keys)


# Per family: report types using it, boolean flags, selections, date filters, entity limit keys
FAMILY_RULES: dict[str, dict[str, Any]] = {
    "users": {
        "types": None,
        "booleans": ("all", "hideExpiredUsers", "hideDeactivated", "isUserAddFields", "showOnlyLearners"),
        "selections": ("users", "groups", "branches"),
        "limits": ("branchesLimit", "groupsLimit", "usersLimit"),
    },
    "courses": {
        "types": {
            T.COURSES_USERS, T.ECOMMERCE_TRANSACTION, T.GROUPS_COURSES, T.SESSIONS_USER_DETAIL,
            T.SURVEYS_INDIVIDUAL_ANSWERS, T.USERS_CLASSROOM_SESSIONS, T.USERS_COURSES,
            T.USERS_ENROLLMENT_TIME, T.USERS_LEARNINGOBJECTS, T.USERS_WEBINAR,
        },
        "booleans": ("all",),
        "selections": ("courses", "categories", "instructors"),
        "scalars": ("courseType",),
        "limits": (
            "coursesLimit", "lpLimit", "courseInstructorsLimit",
            "classroomLimit", "sessionLimit", "webinarLimit",
        ),
    },
    "surveys": {
        "types": {T.SURVEYS_INDIVIDUAL_ANSWERS},
        "booleans": ("all",),
        "selections": ("surveys",),
        "limits": (),
    },
    "learningPlans": {
        "types": {
            T.USERS_LP, T.ECOMMERCE_TRANSACTION, T.GROUPS_COURSES, T.SESSIONS_USER_DETAIL,
            T.SURVEYS_INDIVIDUAL_ANSWERS, T.USERS_CLASSROOM_SESSIONS, T.USERS_COURSES,
            T.USERS_ENROLLMENT_TIME, T.USERS_LEARNINGOBJECTS, T.USERS_WEBINAR, T.COURSES_USERS,
        },
        "booleans": ("all",),
        "selections": ("learningPlans",),
        "limits": (),
    },
    "badges": {
        "types": {T.USERS_BADGES},
        "booleans": ("all",),
        "selections": ("badges",),
        "limits": (),
    },
    "assets": {
        "types": {T.ASSETS_STATISTICS, T.VIEWER_ASSET_DETAILS},
        "booleans": ("all",),
        "selections": ("assets", "channels"),
        "limits": ("assetsLimit", "channelsLimit"),
    },
    "sessions": {
        "types": {T.USERS_CLASSROOM_SESSIONS, T.SESSIONS_USER_DETAIL},
        "booleans": ("all",),
        "selections": ("sessions",),
        "limits": (),
    },
    "instructors": {
        "types": {T.USERS_WEBINAR},
        "booleans": ("all",),
        "selections": ("instructors",),
    },
    "certifications": {
        "types": {T.CERTIFICATIONS_USERS, T.USERS_CERTIFICATIONS},
        "booleans": ("all", "activeCertifications", "archivedCertifications", "expiredCertifications"),
        "selections": ("certifications",),
        "dates": ("certificationDate", "certificationExpirationDate"),
        "strings": ("conditions",),
        "limits": (),
    },
    "enrollment": {
        "types": {T.USERS_CLASSROOM_SESSIONS, T.USERS_COURSES, T.USERS_LP, T.USERS_WEBINAR},
        "booleans": (
            "enrollmentsToConfirm", "completed", "inProgress", "notStarted",
            "overbooking", "subscribed", "suspended", "waitingList",
        ),
        "scalars": ("enrollmentTypes",),
    },
    "sessionDates": {
        "types": {T.USERS_CLASSROOM_SESSIONS, T.SESSIONS_USER_DETAIL, T.USERS_WEBINAR},
        "strings": ("conditions",),
        "dates": ("startDate", "endDate"),
    },
    "externalTrainingStatusFilter": {
        "types": {T.USERS_EXTERNAL_TRAINING},
        "booleans": ("approved", "rejected", "waiting"),
    },
    "publishStatus": {
        "types": {T.VIEWER_ASSET_DETAILS},
        "booleans": ("published", "unpublished"),
    },
    "sessionAttendanceType": {
        "types": {T.USERS_CLASSROOM_SESSIONS, T.SESSIONS_USER_DETAIL},
        "booleans": ("blended", "flexible", "fullOnline", "fullOnsite"),
    },
}

CONDITIONS_TYPES = {
    T.USERS_CLASSROOM_SESSIONS, T.USERS_COURSES, T.COURSES_USERS, T.SESSIONS_USER_DETAIL,
    T.SURVEYS_INDIVIDUAL_ANSWERS, T.USERS_LEARNINGOBJECTS, T.USERS_WEBINAR, T.USERS,
}


def family_changed(report_type: str, family: str, before: Any, after: Any) -> bool:
    """Compare one filter family, only for the report types that use it."""
    rules = FAMILY_RULES[family]
    if rules["types"] is not None and report_type not in rules["types"]:
        return False
    trivial = _appeared_or_vanished(before, after)
    if trivial is not None:
        return trivial
    if not isinstance(before, dict) or not isinstance(after, dict):
        return before != after

    if any(boolean_changed(_get(before, key), _get(after, key)) for key in rules.get("booleans", ())):
        return True
    if any(string_changed(_get(before, key), _get(after, key)) for key in rules.get("strings", ())):
        return True
    if any(_get(before, key) != _get(after, key) for key in rules.get("scalars", ())):
        return True
    if "limits" in rules and _limits_changed(
        _get(before, "entitiesLimits"), _get(after, "entitiesLimits"), rules["limits"]
    ):
        return True
    if any(selection_changed(_get(before, key), _get(after, key)) for key in rules.get("selections", ())):
        return True
    return any(date_options_changed(_get(before, key), _get(after, key)) for key in rules.get("dates", ()))


def _mapping_changed(before: Any, after: Any, compare) -> bool:
    trivial = _appeared_or_vanished(before, after)
    if trivial is not None:
        return trivial
    if not isinstance(before, dict) or not isinstance(after, dict):
        return before != after
    return any(compare(_get(before, key), _get(after, key)) for key in {*before, *after})


def _visibility_type(document: dict[str, Any]) -> Any:
    value = _get(_get(document, "visibility"), "type")
    return None if value is _UNSET else value


def properties_changed(before: dict[str, Any], after: dict[str, Any]) -> dict[str, Any]:
    """Return the changed report properties under their event names."""
    changes: dict[str, Any] = {}
    if string_changed(_get(before, "title"), _get(after, "title")):
        changes["name"] = after.get("title")
    if string_changed(_get(before, "description"), _get(after, "description")):
        changes["description"] = after.get("description")
    if boolean_changed(_get(before, "loginRequired"), _get(after, "loginRequired")):
        changes["login_required_download_report"] = after.get("loginRequired")
    if string_changed(_get(before, "timezone"), _get(after, "timezone")):
        changes["timezone"] = after.get("timezone")

    before_type = _visibility_type(before)
    after_type = _visibility_type(after)
    if str(before_type) != str(after_type):
        label = VISIBILITY_RULE_LABELS.get(after_type) if isinstance(after_type, int) else None
        changes["visibility_rules"] = label or DEFAULT_VISIBILITY_RULE_LABEL

    return changes


def view_options_changed(before: dict[str, Any], after: dict[str, Any]) -> bool:
    """Whether the selected output columns differ, ignoring order."""
    before_fields = before.get("fields") or []
    after_fields = after.get("fields") or []
    if not isinstance(before_fields, list) or not isinstance(after_fields, list):
        return before_fields != after_fields
    return len(before_fields) != len(after_fields) or {_identity(f) for f in before_fields} != {
        _identity(f) for f in after_fields
    }


def filters_changed(before: dict[str, Any], after: dict[str, Any]) -> bool:
    """Whether any filter used by the report type differs."""
    report_type = before.get("type")
    for family in FAMILY_RULES:
        if family_changed(report_type, family, _get(before, family), _get(after, family)):
            return True

    if report_type in CONDITIONS_TYPES and string_changed(
        _get(before, "conditions"), _get(after, "conditions")
    ):
        return True

    if report_type == T.USERS_LEARNINGOBJECTS and _mapping_changed(
        _get(before, "loTypes"), _get(after, "loTypes"), lambda b, a: b != a
    ):
        return True

    if _mapping_changed(
        _get(before, "userAdditionalFieldsFilter"), _get(after, "userAdditionalFieldsFilter"), number_changed
    ):
        return True

    return any(
        date_options_changed(_get(before, name), _get(after, name)) for name in DATE_OPTIONS_FILTERS
    )


def _comparable_planning(planning: dict[str, Any]) -> str:
    option = planning.get("option") or {}
    if isinstance(option, dict):
        option = {**option, "subfolder": None}
    return json.dumps({**planning, "option": option}, sort_keys=True, default=str)


def is_planning_changed(before: dict[str, Any] | None, after: dict[str, Any] | None) -> bool:
    """Whether the schedule differs, ignoring ``subfolder`` and key order."""
    before = before if isinstance(before, dict) else {}
    after = after if isinstance(after, dict) else {}
    if not before.get("active") and not after.get("active"):
        return False
    return _comparable_planning(before) != _comparable_planning(after)
