class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class InvalidWindowError(AppError):
    """Raised when a day window does not end after it starts."""
    def __init__(self, start_minutes: int, end_minutes: int):
        super().__init__(
            "Day window end must be after its start",
            status_code=400,
            details={"startMinutes": start_minutes, "endMinutes": end_minutes},
        )

class SlotLimitExceededError(AppError):
    """Raised when a layout request carries more slots than the service accepts."""
    def __init__(self, received: int, limit: int):
        super().__init__(
            f"Too many slots in request ({received}). Maximum allowed is {limit}.",
            status_code=413,
            details={"received": received, "limit": limit},
        )

class ConfigurationError(AppError):
    """Raised when the configured layout settings cannot produce a day window."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
