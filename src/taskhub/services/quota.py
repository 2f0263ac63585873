"""Plan quota checks applied before quota-limited creations."""

from src.taskhub.core.exceptions import PermissionDeniedError

USER_LIMIT_MESSAGE = "Subscription limit reached"
PROJECT_LIMIT_MESSAGE = "Project limit reached"


def enforce_quota(current: int, limit: int, message: str) -> None:
    """Reject a creation that would take ``current`` past ``limit``."""
    if current >= limit:
        raise PermissionDeniedError(message)
