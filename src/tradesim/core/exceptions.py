"""Application-level exceptions.

Expected trade rejections are not exceptions; see ``TradeResult``.
These cover faults the caller cannot recover from by changing its request.
"""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class AccountNotFoundError(AppError):
    """Raised when the simulator account is missing from storage."""

    def __init__(self, account_id: int):
        super().__init__(f"Account not found: {account_id}", code="ACCOUNT_NOT_FOUND")


class ConfigurationError(AppError):
    """Raised when settings name an unknown option."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")
