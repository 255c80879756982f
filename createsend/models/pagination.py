"""
Paged subscriber listings.
"""

from __future__ import annotations

from datetime import date as _date
from datetime import datetime as _datetime
from typing import Any, Generic, TypeVar

from pydantic import Field

from .entities import CreateSendModel
from .types import OrderDirection, OrderDirectionLike, wire_value

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 1000
DEFAULT_ORDER_FIELD = "email"
DEFAULT_ORDER_DIRECTION = OrderDirection.ASC


def page_query(
    date: str | _date,
    *,
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
    order_field: str = DEFAULT_ORDER_FIELD,
    order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
) -> dict[str, Any]:
    """Build the query string shared by all subscriber listings."""
    if isinstance(date, _datetime):
        date = date.date()
    return {
        "date": date.isoformat() if isinstance(date, _date) else date,
        "page": page,
        "pagesize": page_size,
        "orderfield": order_field,
        "orderdirection": wire_value(order_direction),
    }


class SubscriberPage(CreateSendModel, Generic[T]):
    """One page of a subscriber listing."""

    results: list[T] = Field(default_factory=list)
    results_ordered_by: str | None = None
    order_direction: str | None = None
    page_number: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    records_on_this_page: int = 0
    total_number_of_records: int = 0
    number_of_pages: int = 0

    @property
    def has_next(self) -> bool:
        return self.page_number < self.number_of_pages

    @property
    def next_page(self) -> int | None:
        return self.page_number + 1 if self.has_next else None
