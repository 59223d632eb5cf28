import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from takatena.domain.validation import FieldError, ValidationError

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class PageRequest:
    """1-based page number plus page size."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        errors: list[FieldError] = []
        if self.page < 1:
            errors.append(FieldError("page", "Page must be at least 1", "too_small"))
        if self.limit <= 0:
            errors.append(FieldError("limit", "Limit must be positive", "too_small"))
        if errors:
            raise ValidationError(errors)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit); zero rows means zero pages."""
    return math.ceil(total / limit)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    total_pages: int

    @classmethod
    def build(cls, items: list[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            page=request.page,
            total_pages=total_pages(total, request.limit),
        )
