"""Schema-driven validation of report configuration documents.

Report documents are JSON-shaped dictionaries with camelCase keys. A patch is
sparse: a key that is absent is never checked, a key explicitly set to
``None`` is always rejected. The first violation aborts the whole check.
"""

import logging
import re
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from app.modules.reports.constants import (
    DATE_OPTIONS_FILTERS,
    ENROLLMENT_STATUS_FLAGS,
    EXTRA_FIELD_PREFIXES,
    FIELDS_NOT_EDITABLE,
    QUERY_BUILDER_FILTER_TYPE_TEXT,
    REPORT_TYPES_COURSES_MANDATORY,
    REPORT_TYPES_EXTRA_MANDATORY,
    REPORT_TYPES_USERS_MANDATORY,
    Conditions,
    CourseTypeFilter,
    EnrollmentTypes,
    Operators,
    ReportsTypes,
    Selectors,
    TextFilterOptions,
    TimeFrameOptions,
    TypeOperator,
    UserLevels,
    VisibilityTypes,
)
from app.modules.reports.exceptions import (
    FieldNotEditableException,
    InvalidFieldException,
    MandatoryFieldNotFoundException,
    ReportException,
)
from app.modules.reports.fields import FIELDS_LIST

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for a key absent from a document."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
O_CLOCK_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):00$")
_LEADING_INTEGER = re.compile(r"\s*\+?\d")


def _values(enum_cls) -> list:
    return [member.value for member in enum_cls]


def get_path(document: Any, path: str) -> Any:
    """Read a dotted path, returning MISSING when any step is absent."""
    value = document
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return MISSING
        value = value[key]
    return value


def is_falsy(value: Any) -> bool:
    """Emptiness as the stored documents understand it.

    Empty objects and lists are present values; only missing, ``None``,
    ``False``, zero and the empty string count as not set.
    """
    if value is MISSING or value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        date_parser.parse(value)
    except (ValueError, OverflowError):
        return False
    return True


def is_valid_timezone(value: Any) -> bool:
    if not isinstance(value, str) or value == "":
        return False
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def is_o_clock_time(value: Any) -> bool:
    return isinstance(value, str) and O_CLOCK_TIME_PATTERN.fullmatch(value) is not None


def _is_numeric_key(key: str) -> bool:
    try:
        number = float(key)
    except ValueError:
        return False
    return number == number


def _is_info_filter(value: Any) -> bool:
    if not isinstance(value, list):
        return False
    for item in value:
        if not isinstance(item, dict) or not is_number(item.get("id", MISSING)):
            return False
        if "descendants" in item and not isinstance(item["descendants"], bool):
            return False
    return True


# Patch paths checked by validate_patch_input: (path, expected type, allowed values)
PATCH_RULES: list[tuple[str, str, list | None]] = [
    ("loginRequired", "boolean", None),
    ("description", "string", None),
    ("timezone", "timezone", None),
    ("title", "string", None),
    ("fields", "string[]", None),
    ("conditions", "string", _values(Conditions)),
    ("userAdditionalFieldsFilter", "userAdditionalFieldsFilter", None),
    ("loTypes", "loTypes", None),
    ("visibility", "object", None),
    ("visibility.type", "number", _values(VisibilityTypes)),
    ("visibility.groups", "InfoFilter", None),
    ("visibility.users", "InfoFilter", None),
    ("visibility.branches", "InfoFilter", None),
    ("planning", "object", None),
    ("planning.active", "boolean", None),
    ("planning.option", "PlanningOption", None),
    ("sortingOptions", "object", None),
    ("sortingOptions.selector", "string", _values(Selectors)),
    ("sortingOptions.selectedField", "string", None),
    ("sortingOptions.orderBy", "string", ["desc", "asc"]),
    ("users.hideDeactivated", "boolean", None),
    ("users.showOnlyLearners", "boolean", None),
    ("users.hideExpiredUsers", "boolean", None),
    ("users.isUserAddFields", "boolean", None),
    ("users.groups", "InfoFilter", None),
    ("users.branches", "InfoFilter", None),
    ("courses.categories", "InfoFilter", None),
    ("courses.instructors", "InfoFilter", None),
    ("courses.courseType", "number", _values(CourseTypeFilter)),
    ("assets.channels", "InfoFilter", None),
    ("enrollment", "Enrollment", None),
    ("certifications", "object", None),
    ("certifications.activeCertifications", "boolean", None),
    ("certifications.expiredCertifications", "boolean", None),
    ("certifications.archivedCertifications", "boolean", None),
    ("certifications.certificationDate", "DateOptionsFilter", None),
    ("certifications.certificationExpirationDate", "DateOptionsFilter", None),
    ("certifications.conditions", "string", _values(Conditions)),
    ("sessionDates", "object", None),
    ("sessionDates.startDate", "DateOptionsFilter", None),
    ("sessionDates.endDate", "DateOptionsFilter", None),
    ("sessionDates.conditions", "string", _values(Conditions)),
    ("externalTrainingStatusFilter", "object", None),
    ("externalTrainingStatusFilter.approved", "boolean", None),
    ("externalTrainingStatusFilter.waiting", "boolean", None),
    ("externalTrainingStatusFilter.rejected", "boolean", None),
    ("publishStatus", "object", None),
    ("publishStatus.published", "boolean", None),
    ("publishStatus.unpublished", "boolean", None),
    ("sessionAttendanceType", "object", None),
    ("sessionAttendanceType.blended", "boolean", None),
    ("sessionAttendanceType.fullOnsite", "boolean", None),
    ("sessionAttendanceType.fullOnline", "boolean", None),
    ("sessionAttendanceType.flexible", "boolean", None),
]

# Entity filter families: an object with an ``all`` flag and a same-named id list
GENERIC_FILTERS = (
    "users",
    "courses",
    "surveys",
    "learningPlans",
    "badges",
    "assets",
    "sessions",
    "instructors",
    "certifications",
)


class ReportValidation:
    """Validation rules for report configuration documents."""

    @staticmethod
    def validate_field(
        name: str, value: Any, expected_type: str, allowed_values: list | None = None
    ) -> bool:
        """Check one value against an expected type.

        Composite types check their sub-fields recursively; a failing sub-field
        is reported under its own dotted name.

        Args:
            name: Dotted field name used in the error.
            value: Value to check, MISSING when the key is absent.
            expected_type: One of the supported type names.
            allowed_values: Accepted values for ``string`` and ``number`` types.

        Returns:
            True when the value is valid or absent.

        Raises:
            InvalidFieldException: If the value is invalid.
        """
        if value is MISSING:
            return True
        if value is None:
            raise InvalidFieldException(name)

        try:
            valid = ReportValidation._check_type(name, value, expected_type)
        except ReportException:
            raise
        except Exception as exc:
            raise InvalidFieldException(name) from exc

        if valid and expected_type in ("number", "string") and allowed_values is not None:
            valid = value in allowed_values
        if not valid:
            raise InvalidFieldException(name)
        return True

    @staticmethod
    def _check_type(name: str, value: Any, expected_type: str) -> bool:
        validate = ReportValidation.validate_field

        match expected_type:
            case "string":
                return isinstance(value, str)
            case "boolean":
                return isinstance(value, bool)
            case "number":
                return is_number(value)
            case "numberGreaterThanZero":
                return is_number(value) and value > 0
            case "date":
                return is_valid_date(value)
            case "timezone":
                return is_valid_timezone(value)
            case "time":
                return is_o_clock_time(value)
            case "object":
                return isinstance(value, dict)
            case "string[]":
                return isinstance(value, list) and all(isinstance(item, str) for item in value)
            case "emails[]":
                return isinstance(value, list) and all(
                    isinstance(item, str) and EMAIL_PATTERN.match(item) for item in value
                )
            case "userAdditionalFieldsFilter":
                return isinstance(value, dict) and all(
                    _is_numeric_key(key) and is_number(item) for key, item in value.items()
                )
            case "loTypes":
                return isinstance(value, dict) and all(isinstance(item, bool) for item in value.values())
            case "InfoFilter":
                return _is_info_filter(value)
            case "PlanningOption":
                return (
                    isinstance(value, dict)
                    and validate(f"{name}.recipients", value.get("recipients", MISSING), "emails[]")
                    and validate(f"{name}.every", value.get("every", MISSING), "numberGreaterThanZero")
                    and validate(
                        f"{name}.timeFrame",
                        value.get("timeFrame", MISSING),
                        "string",
                        _values(TimeFrameOptions),
                    )
                    and validate(f"{name}.scheduleFrom", value.get("scheduleFrom", MISSING), "date")
                    and validate(f"{name}.startHour", value.get("startHour", MISSING), "time")
                    and validate(f"{name}.timezone", value.get("timezone", MISSING), "timezone")
                )
            case "Enrollment":
                return (
                    isinstance(value, dict)
                    and all(
                        validate(f"{name}.{flag}", value.get(flag, MISSING), "boolean")
                        for flag in ENROLLMENT_STATUS_FLAGS
                    )
                    and validate(
                        f"{name}.enrollmentTypes",
                        value.get("enrollmentTypes", MISSING),
                        "number",
                        _values(EnrollmentTypes),
                    )
                )
            case "DateOptionsFilter":
                return (
                    isinstance(value, dict)
                    and validate(f"{name}.any", value.get("any", MISSING), "boolean")
                    and validate(
                        f"{name}.operator", value.get("operator", MISSING), "string", _values(Operators)
                    )
                    and validate(
                        f"{name}.type", value.get("type", MISSING), "string", _values(TypeOperator)
                    )
                    and validate(f"{name}.from", value.get("from", MISSING), "date")
                    and validate(f"{name}.to", value.get("to", MISSING), "date")
                    and validate(f"{name}.days", value.get("days", MISSING), "number")
                )
            case _:
                return True

    @staticmethod
    def is_extra_field(field: str) -> bool:
        """Return whether a field is a custom extra field such as ``user_extrafield_12``."""
        for prefix in EXTRA_FIELD_PREFIXES:
            if field.startswith(prefix) and _LEADING_INTEGER.match(field[len(prefix):]):
                return True
        return False

    @staticmethod
    def check_not_editable_fields(info: dict[str, Any], data: dict[str, Any]) -> None:
        for field in FIELDS_NOT_EDITABLE:
            if field in data and info.get(field, MISSING) != data[field]:
                raise FieldNotEditableException(field)

    @staticmethod
    def check_login_required(info: dict[str, Any], data: dict[str, Any]) -> None:
        if "loginRequired" in data and data["loginRequired"] != info.get("loginRequired", MISSING):
            raise FieldNotEditableException("loginRequired")

    @staticmethod
    def validate_field_views(info: dict[str, Any], data: dict[str, Any]) -> None:
        """Check selected output columns and the active sort column."""
        if info.get("type") == ReportsTypes.QUERY_BUILDER_DETAIL.value:
            return

        fields = data["fields"] if "fields" in data else (info.get("fields") or [])
        sorting_field = get_path(data, "sortingOptions.selectedField")
        if sorting_field is MISSING:
            sorting_field = get_path(info, "sortingOptions.selectedField")
            if sorting_field is MISSING or sorting_field is None:
                sorting_field = ""

        for field in fields:
            if field not in FIELDS_LIST and not ReportValidation.is_extra_field(field):
                raise InvalidFieldException(f"fields.{field}")
        if sorting_field not in fields:
            raise InvalidFieldException("sortingOptions.selectedField")

    @staticmethod
    def validate_patch_input(data: dict[str, Any]) -> None:
        """Type-check every known path of a patch payload.

        Raises:
            InvalidFieldException: On the first invalid value. Unexpected
                errors are reported as ``Generic error on validation``.
        """
        validate = ReportValidation.validate_field
        try:
            for path, expected_type, allowed_values in PATCH_RULES:
                validate(path, get_path(data, path), expected_type, allowed_values)

            for field in DATE_OPTIONS_FILTERS:
                validate(field, data.get(field, MISSING), "DateOptionsFilter")

            for field in GENERIC_FILTERS:
                value = data.get(field, MISSING)
                if value is MISSING:
                    continue
                validate(field, value, "object")
                validate(f"{field}.all", value.get("all", MISSING), "boolean")
                validate(f"{field}.{field}", value.get(field, MISSING), "InfoFilter")
        except ReportException:
            raise
        except Exception as exc:
            logger.warning(f"Unexpected error while validating report patch: {exc}")
            raise InvalidFieldException("Generic error on validation") from exc

    @staticmethod
    def validate(
        info: dict[str, Any],
        user_level: str,
        download_link_enabled: bool,
        is_patch: bool,
        data: dict[str, Any],
    ) -> None:
        """Checks run on the incoming payload before it is merged.

        Args:
            info: Current report document.
            user_level: Level of the caller (see UserLevels).
            download_link_enabled: Whether the download-permission-link feature is on.
            is_patch: Partial update (True) or full replace (False).
            data: Incoming payload.
        """
        if "platform" in data and info.get("platform", MISSING) != data["platform"]:
            raise InvalidFieldException("platform")
        if user_level == UserLevels.POWER_USER.value and not download_link_enabled:
            ReportValidation.check_login_required(info, data)
        if not is_patch:
            return

        ReportValidation.check_not_editable_fields(info, data)
        ReportValidation.validate_patch_input(data)
        ReportValidation.validate_field_views(info, data)

    @staticmethod
    def check_filters(info: dict[str, Any]) -> None:
        """Selective visibility and ``all: false`` filters need at least one selection."""
        visibility = info.get("visibility")
        if isinstance(visibility, dict) and visibility.get("type") == VisibilityTypes.ALL_GODADMINS_AND_SELECTED_PU:
            if not any(visibility.get(key) for key in ("users", "branches", "groups")):
                raise InvalidFieldException("visibility")

        courses = info.get("courses")
        learning_plans = info.get("learningPlans")
        merged_courses = {
            **(courses if isinstance(courses, dict) else {}),
            "learningPlans": (
                learning_plans.get("learningPlans") if isinstance(learning_plans, dict) else None
            )
            or [],
        }

        families: list[tuple[str, Any, tuple[str, ...]]] = [
            ("users", info.get("users"), ("groups", "branches")),
            ("courses", merged_courses, ("learningPlans",)),
            ("surveys", info.get("surveys"), ()),
            ("learningPlans", learning_plans, ()),
            ("badges", info.get("badges"), ()),
            ("assets", info.get("assets"), ("channels",)),
            ("sessions", info.get("sessions"), ()),
            ("instructors", info.get("instructors"), ()),
            ("certifications", info.get("certifications"), ()),
        ]
        for family, value, additional in families:
            if not isinstance(value, dict) or value.get("all") is not False:
                continue
            selected = [
                key
                for key in (family, *additional)
                if isinstance(value.get(key), list) and len(value[key]) > 0
            ]
            if not selected:
                raise InvalidFieldException(f"{family}.all")

    @staticmethod
    def check_date_options(info: dict[str, Any]) -> None:
        """Check the operator-dependent fields of every date filter in use."""
        validate = ReportValidation.validate_field
        for name in DATE_OPTIONS_FILTERS:
            value = info.get(name)
            if value is None:
                continue
            if not isinstance(value, dict):
                raise InvalidFieldException(name)

            validate(f"{name}.any", value.get("any", MISSING), "boolean")
            if value.get("any"):
                continue

            operator = value.get("operator", MISSING)
            validate(f"{name}.operator", operator, "string", _values(Operators))
            if operator in (Operators.IS_AFTER.value, Operators.IS_BEFORE.value):
                validate(
                    f"{name}.type",
                    value.get("type", MISSING),
                    "string",
                    [TypeOperator.RELATIVE.value, TypeOperator.ABSOLUTE.value],
                )
                if value.get("type") == TypeOperator.RELATIVE.value:
                    validate(f"{name}.days", value.get("days", MISSING), "number")
                else:
                    validate(f"{name}.to", value.get("to", MISSING), "date")
            elif operator == Operators.RANGE.value:
                validate(f"{name}.from", value.get("from", MISSING), "date")
                validate(f"{name}.to", value.get("to", MISSING), "date")
                if isinstance(value.get("from"), str) and isinstance(value.get("to"), str):
                    # Day granularity: start of "from" against end of "to"
                    date_from = date_parser.parse(value["from"]).date()
                    date_to = date_parser.parse(value["to"]).date()
                    if date_from > date_to:
                        raise InvalidFieldException(f"{name}.from")
            elif operator == Operators.EXPIRING_IN.value:
                validate(f"{name}.days", value.get("days", MISSING), "number")

    @staticmethod
    def check_enrollment(info: dict[str, Any]) -> None:
        if "enrollment" not in info:
            return
        enrollment = info["enrollment"]
        if isinstance(enrollment, dict) and any(enrollment.get(flag) for flag in ENROLLMENT_STATUS_FLAGS):
            return
        raise InvalidFieldException("enrollment")

    @staticmethod
    def check_mandatory_fields(is_datalake_v2_active: bool, info: dict[str, Any]) -> None:
        """Fields every report needs, in the order they are reported."""
        if is_falsy(info.get("title", MISSING)):
            raise MandatoryFieldNotFoundException("title")
        if is_falsy(info.get("author", MISSING)):
            raise MandatoryFieldNotFoundException("author")
        fields = info.get("fields", MISSING)
        if is_falsy(fields) or not isinstance(fields, list) or len(fields) == 0:
            raise MandatoryFieldNotFoundException("fields")
        if is_falsy(info.get("visibility", MISSING)):
            raise MandatoryFieldNotFoundException("visibility")

        if get_path(info, "planning.active") is True:
            recipients = get_path(info, "planning.option.recipients")
            if not isinstance(recipients, list) or len(recipients) == 0:
                raise MandatoryFieldNotFoundException("planning.option.recipients")

        if not is_datalake_v2_active:
            return
        if is_falsy(get_path(info, "planning.option.startHour")):
            raise MandatoryFieldNotFoundException("planning.option.startHour")

    @staticmethod
    def check_mandatory_fields_for_specific_report(info: dict[str, Any]) -> None:
        """Sub-documents required by the report type."""
        report_type = info.get("type")
        if is_falsy(info.get("users", MISSING)) and report_type in REPORT_TYPES_USERS_MANDATORY:
            raise MandatoryFieldNotFoundException("users")
        if is_falsy(info.get("courses", MISSING)) and report_type in REPORT_TYPES_COURSES_MANDATORY:
            raise MandatoryFieldNotFoundException("courses")

        required = REPORT_TYPES_EXTRA_MANDATORY.get(report_type)
        if required is not None and is_falsy(info.get(required, MISSING)):
            raise MandatoryFieldNotFoundException(required)

        if report_type != ReportsTypes.QUERY_BUILDER_DETAIL.value:
            return

        text_operators = _values(TextFilterOptions)
        query_builder_filters = info.get("queryBuilderFilters")
        if not isinstance(query_builder_filters, dict):
            return
        for filter_name, descriptor in query_builder_filters.items():
            if not isinstance(descriptor, dict) or descriptor.get("type") != QUERY_BUILDER_FILTER_TYPE_TEXT:
                continue
            if descriptor.get("any") is False and descriptor.get("operator") not in text_operators:
                raise InvalidFieldException(f"operator for filter {filter_name}")
