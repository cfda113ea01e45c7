class SnowflakeException(Exception):
    """Base exception for all Snowflake-related errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SnowflakeCredentialException(SnowflakeException):
    """Exception raised when there are issues with Snowflake credentials."""

    def __init__(self, message: str):
        super().__init__(message)


class SnowflakeSessionException(SnowflakeException):
    """Exception raised when the Snowpark session is not initialized."""

    def __init__(self, message: str):
        super().__init__(message)


class SnowflakeQueryException(SnowflakeException):
    """Exception raised when a Snowflake query fails."""

    def __init__(self, message: str):
        super().__init__(message)


class SnowflakeTableException(SnowflakeException):
    """Exception raised when a log or claims table is missing or cannot be created."""

    def __init__(self, message: str):
        super().__init__(message)


class SnowflakeInsertException(SnowflakeException):
    """Exception raised when writing monthly log rows fails."""

    def __init__(self, message: str):
        super().__init__(message)


class SnowflakePrivateKeyException(SnowflakeException):
    """Exception raised when the key-pair private key cannot be loaded."""

    def __init__(self, message: str):
        super().__init__(message)
