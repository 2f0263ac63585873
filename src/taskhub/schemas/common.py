"""Shared schema building blocks: camelCase wire format, envelope, pagination."""

import math
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire.

    Requests are accepted in either spelling; responses are serialized with
    aliases (FastAPI's default for response models).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint."""

    success: bool = True
    message: str | None = None
    data: T | None = None


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    limit: int

    @classmethod
    def build(cls, page: int, limit: int, total: int, **extra: Any) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            limit=limit,
            **extra,
        )


def reject_null(value: Any) -> Any:
    """Field validator body for optional-but-not-nullable update fields."""
    if value is None:
        raise ValueError("Field may be omitted but cannot be null")
    return value


def change_set(data: BaseModel) -> dict[str, Any]:
    """Fields explicitly present in a partial-update body, enums as plain values."""
    return {
        name: value.value if isinstance(value, Enum) else value
        for name, value in data.model_dump(exclude_unset=True).items()
    }
