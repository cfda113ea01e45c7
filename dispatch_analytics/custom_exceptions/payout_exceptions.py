class PayoutException(Exception):
    """Base exception for payout inference errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownFirmException(PayoutException):
    """Exception raised when a firm has no pay-cycle configuration."""

    def __init__(self, message: str, firm_name: str | None = None):
        super().__init__(message)
        self.firm_name = firm_name


class PayCycleConfigurationException(PayoutException):
    """Exception raised when a firm's pay-cycle settings are incomplete."""

    def __init__(self, message: str):
        super().__init__(message)
