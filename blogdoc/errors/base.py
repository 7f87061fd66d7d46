class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(self, detail: str = "Internal Error") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail
