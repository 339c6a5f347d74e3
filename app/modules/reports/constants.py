"""Enumerations and rule tables for report configuration documents."""

from enum import Enum, IntEnum


class ReportsTypes(str, Enum):
    CERTIFICATIONS_USERS = "Certifications - Users"
    COURSES_USERS = "Courses - Users"
    ECOMMERCE_TRANSACTION = "Ecommerce - Transactions"
    GROUPS_COURSES = "Groups/Branches - Courses"
    SURVEYS_INDIVIDUAL_ANSWERS = "Surveys - Individual Answers"
    USERS = "Users"
    USERS_BADGES = "Users - Badges"
    USERS_CERTIFICATIONS = "Users - Certifications"
    USERS_CLASSROOM_SESSIONS = "Users - Classroom Sessions"
    USERS_COURSES = "Users - Courses"
    USERS_ENROLLMENT_TIME = "Users - Course Enrollment Time"
    USERS_EXTERNAL_TRAINING = "Users - External Training"
    USERS_LEARNINGOBJECTS = "Users - Learning Objects"
    USERS_LP = "Users - Learning Plans"
    USERS_WEBINAR = "Users - Webinar Sessions"
    ASSETS_STATISTICS = "Assets - Statistics"
    USER_CONTRIBUTIONS = "User - Contributions"
    QUERY_BUILDER_DETAIL = "Query - Builder"
    VIEWER_ASSET_DETAILS = "Viewer - Asset Details"
    SESSIONS_USER_DETAIL = "Sessions - Users Statistics"
    MANAGER_USERS_COURSES = "01"
    MANAGER_USERS_LP = "02"
    MANAGER_USERS_CERTIFICATIONS = "03"
    MANAGER_USERS_CLASSROOM_SESSIONS = "04"
    LP_USERS_STATISTICS = "Learning plans - Users Statistics"


class VisibilityTypes(IntEnum):
    ALL_GODADMINS = 1
    ALL_GODADMINS_AND_PU = 2
    ALL_GODADMINS_AND_SELECTED_PU = 3


class EnrollmentTypes(IntEnum):
    ACTIVE = 1
    ARCHIVED = 2
    ACTIVE_AND_ARCHIVED = 3


class CourseTypeFilter(IntEnum):
    ALL = 0
    E_LEARNING = 1
    ILT = 2


class TimeFrameOptions(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class Selectors(str, Enum):
    DEFAULT = "default"
    CUSTOM = "custom"


class TypeOperator(str, Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    RANGE = "range"


class Conditions(str, Enum):
    ALL_CONDITIONS = "allConditions"
    AT_LEAST_ONE_CONDITION = "atLeastOneCondition"


class Operators(str, Enum):
    IS_BEFORE = "isBefore"
    IS_AFTER = "isAfter"
    RANGE = "range"
    EXPIRING_IN = "expiringIn"
    IS_EQUAL = "isEqual"


class TextFilterOptions(str, Enum):
    EQUALS = "equals"
    LIKE = "like"
    NOT_EQUALS = "notEquals"
    IS_EMPTY = "isEmpty"


class UserLevels(str, Enum):
    GOD_ADMIN = "super_admin"
    POWER_USER = "power_user"
    USER = "user"


# Fields a patch may never change and a full replace silently drops
FIELDS_NOT_EDITABLE = (
    "deleted",
    "queryBuilderId",
    "queryBuilderName",
    "author",
    "creationDate",
    "lastEdit",
    "lastEditBy",
    "standard",
    "type",
    "platform",
    "idReport",
    "isReportDownloadPermissionLink",
    "isReportDownloadPermissionLinkEnable",
)

DATE_OPTIONS_FILTERS = (
    "enrollmentDate",
    "completionDate",
    "surveyCompletionDate",
    "archivingDate",
    "courseExpirationDate",
    "issueDate",
    "creationDateOpts",
    "expirationDateOpts",
    "publishedDate",
    "contributionDate",
    "externalTrainingDate",
)

REPORT_TYPES_USERS_MANDATORY = frozenset(
    {
        ReportsTypes.USERS,
        ReportsTypes.USERS_BADGES,
        ReportsTypes.USERS_CLASSROOM_SESSIONS,
        ReportsTypes.USERS_EXTERNAL_TRAINING,
        ReportsTypes.USERS_LP,
        ReportsTypes.LP_USERS_STATISTICS,
        ReportsTypes.USER_CONTRIBUTIONS,
        ReportsTypes.COURSES_USERS,
        ReportsTypes.ECOMMERCE_TRANSACTION,
        ReportsTypes.GROUPS_COURSES,
        ReportsTypes.USERS_COURSES,
        ReportsTypes.USERS_ENROLLMENT_TIME,
        ReportsTypes.USERS_LEARNINGOBJECTS,
        ReportsTypes.SESSIONS_USER_DETAIL,
        ReportsTypes.USERS_CERTIFICATIONS,
        ReportsTypes.USERS_WEBINAR,
    }
)

REPORT_TYPES_COURSES_MANDATORY = frozenset(
    {
        ReportsTypes.COURSES_USERS,
        ReportsTypes.ECOMMERCE_TRANSACTION,
        ReportsTypes.GROUPS_COURSES,
        ReportsTypes.USERS_COURSES,
        ReportsTypes.USERS_ENROLLMENT_TIME,
        ReportsTypes.USERS_LEARNINGOBJECTS,
        ReportsTypes.SESSIONS_USER_DETAIL,
        ReportsTypes.USERS_WEBINAR,
    }
)

# Additional sub-document required by a report type
REPORT_TYPES_EXTRA_MANDATORY = {
    ReportsTypes.CERTIFICATIONS_USERS: "certifications",
    ReportsTypes.USERS_CERTIFICATIONS: "certifications",
    ReportsTypes.USERS_WEBINAR: "instructors",
    ReportsTypes.ASSETS_STATISTICS: "assets",
    ReportsTypes.VIEWER_ASSET_DETAILS: "assets",
}

EXTRA_FIELD_PREFIXES = (
    "course_extrafield_",
    "courseuser_extrafield_",
    "user_extrafield_",
    "classroom_extrafield_",
    "external_activity_extrafield_",
    "lp_extrafield_",
    "webinar_extrafield_",
)

ENROLLMENT_STATUS_FLAGS = (
    "completed",
    "inProgress",
    "notStarted",
    "waitingList",
    "suspended",
    "enrollmentsToConfirm",
    "subscribed",
    "overbooking",
)

QUERY_BUILDER_FILTER_TYPE_TEXT = "text"

LAST_EDIT_FORMAT = "%Y-%m-%d %H:%M:%S"
