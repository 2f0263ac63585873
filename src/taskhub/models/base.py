from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp for created_at / updated_at columns.

    Tenant, user, project, task and audit tables store TIMESTAMP WITHOUT
    TIME ZONE; every value written is UTC.
    """
    return datetime.now(UTC).replace(tzinfo=None)
