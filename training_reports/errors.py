"""Exceptions raised while generating training reports."""


class ReportError(Exception):
    """Base class for report generation failures."""


class UserNotFoundError(ReportError):
    """The requested user does not exist."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class InvalidPeriodError(ReportError, ValueError):
    """Month or year outside the accepted reporting range."""
