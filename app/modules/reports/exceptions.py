"""Report domain exceptions with stable numeric codes."""


class ReportException(Exception):
    """Base exception for report errors."""

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.message = message
        self.code = code


class InvalidReportIdException(ReportException):
    INVALID_ID = 1000
    INVALID_PLATFORM = 1001

    @classmethod
    def invalid_id(cls) -> "InvalidReportIdException":
        return cls("Report id is not a valid UUID", cls.INVALID_ID)

    @classmethod
    def invalid_platform(cls) -> "InvalidReportIdException":
        return cls("Platform is not a valid string", cls.INVALID_PLATFORM)


class ReportNotFoundException(ReportException):
    def __init__(self, report_id: str):
        super().__init__(f"Report not found {report_id}", 1002)
        self.report_id = report_id


class MandatoryFieldNotFoundException(ReportException):
    def __init__(self, field: str):
        super().__init__(f'Mandatory field "{field}" not found', 1003)
        self.field = field


class InvalidFieldException(ReportException):
    def __init__(self, field: str):
        super().__init__(f'Invalid field "{field}"', 1004)
        self.field = field


class FieldNotEditableException(ReportException):
    def __init__(self, field: str):
        super().__init__(f'Field "{field}" not editable', 1005)
        self.field = field
