"""Query builder exceptions."""

from app.modules.query_builder.constants import JSON_AREA_ERRORS, ErrorCode


class QueryBuilderException(Exception):
    """Raised when a SQL template or its filter definitions are rejected."""

    def __init__(self, message: str, code: ErrorCode):
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def area(self) -> str:
        """Editor area the error belongs to ('sql' or 'json')."""
        return "json" if self.code in JSON_AREA_ERRORS else "sql"

    def __repr__(self) -> str:
        return f"QueryBuilderException(code={int(self.code)}, message={self.message!r})"


class QueryError(Exception):
    """Raised by a query engine when the underlying store refuses a query."""

    pass


class RelatedReportsException(QueryBuilderException):
    """Raised when deactivating a custom report type that reports still use."""

    def __init__(self, report_titles: list[str]):
        super().__init__(
            "Found related reports to the query builder", ErrorCode.QUERY_BUILDER_RELATED_REPORT
        )
        self.report_titles = report_titles


class CustomReportTypeNotFoundException(Exception):
    def __init__(self, custom_report_type_id: str):
        super().__init__(f"Custom report type not found {custom_report_type_id}")
        self.custom_report_type_id = custom_report_type_id


class QueryExecutionNotFoundException(Exception):
    """Raised when an execution id is unknown, expired or launched by another custom report type."""

    def __init__(self, query_execution_id: str):
        super().__init__(
            f"Query execution {query_execution_id} doesn't exist or is not associated "
            "with this custom report type"
        )
        self.query_execution_id = query_execution_id
