class ReportException(Exception):
    """Base exception for report generation errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DataFetchException(ReportException):
    """Exception raised when the claims store returns an error."""

    def __init__(self, message: str):
        super().__init__(message)


class NoDataException(ReportException):
    """Exception raised when a report has no input rows to work with."""

    def __init__(self, message: str):
        super().__init__(message)


class ReportNotFoundException(ReportException):
    """Exception raised when an unknown report name is requested."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidReportParameterException(ReportException):
    """Exception raised when a report option is out of range."""

    def __init__(self, message: str):
        super().__init__(message)
