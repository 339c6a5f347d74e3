"""Error codes and filter types used by the query builder."""

from enum import Enum, IntEnum


class ErrorCode(IntEnum):
    """Stable numeric codes returned to API clients."""

    QUERY_BUILDER_RELATED_REPORT = 15
    WRONG_JSON = 16
    MORE_FILTER_IN_JSON = 17
    FILTER_NOT_FOUND_IN_JSON = 18
    MISSING_FIELD_IN_JSON_FILTER = 19
    MISSING_TYPE_IN_JSON_FILTER = 20
    WRONG_TYPE_IN_JSON_FILTER = 21
    JSON_AREA_EMPTY = 22
    JSON_AREA_FILLED = 23
    WRONG_SQL = 24
    MISSING_DESCRIPTION_IN_JSON_FILTER = 25
    NO_MEMBER_IN_TEAM = 26
    ENROLLMENT_STATUS_NOT_VALID = 27
    ENROLLMENT_DATE_NOT_VALID = 28
    REPORT_TYPE_NOT_VALID = 29
    USER_ADD_FIELD_FORMAT_NOT_VALID = 30
    USER_ADD_FIELD_TYPE_NOT_VALID = 31
    USER_ADD_FIELD_NOT_AVAILABLE = 32
    MISSING_NAME_FIELD = 33


# Codes raised while checking the json area rather than the sql area
JSON_AREA_ERRORS = frozenset(
    {
        ErrorCode.WRONG_JSON,
        ErrorCode.MORE_FILTER_IN_JSON,
        ErrorCode.FILTER_NOT_FOUND_IN_JSON,
        ErrorCode.MISSING_FIELD_IN_JSON_FILTER,
        ErrorCode.MISSING_TYPE_IN_JSON_FILTER,
        ErrorCode.WRONG_TYPE_IN_JSON_FILTER,
        ErrorCode.JSON_AREA_EMPTY,
        ErrorCode.JSON_AREA_FILLED,
        ErrorCode.MISSING_DESCRIPTION_IN_JSON_FILTER,
    }
)


class FilterType(str, Enum):
    """Accepted values for the ``type`` of a filter descriptor."""

    USERS = "users"
    COURSES = "courses"
    BRANCHES = "branches"
    DATE = "date"
    TEXT = "text"


ALLOWED_FILTER_TYPES = frozenset(t.value for t in FilterType)

# Filter types whose descriptor must carry a description for the UI
DESCRIBED_FILTER_TYPES = frozenset({FilterType.DATE.value, FilterType.TEXT.value})

# Custom report type status values
QUERY_BUILDER_INACTIVE = 0
QUERY_BUILDER_ACTIVE = 1

LAST_EDIT_BY_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
