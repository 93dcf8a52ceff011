"""Request and filter value objects."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.enums import FeeClass, OrderStatus, TradeDirection


class PageRequest(BaseModel):
    """One page of the order-history endpoint.

    Date range and direction are enforced server-side.
    """

    page_number: int = Field(1, ge=1)
    rows_per_page: int = Field(50, ge=1)
    start_time: int | None = Field(None, ge=0, description="Start epoch ms (inclusive)")
    end_time: int | None = Field(None, ge=0, description="End epoch ms (inclusive)")
    direction: TradeDirection | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_range(self) -> PageRequest:
        """Validate start_time <= end_time when both are set."""
        if self.start_time is not None and self.end_time is not None:
            if self.start_time > self.end_time:
                raise ValueError("start_time must be <= end_time")
        return self


class SearchCriteria(BaseModel):
    """Server-side search criteria; changing them starts a new search."""

    start_time: int | None = Field(None, ge=0)
    end_time: int | None = Field(None, ge=0)
    direction: TradeDirection | None = None

    model_config = ConfigDict(frozen=True)

    def page(self, page_number: int, rows_per_page: int) -> PageRequest:
        """Build the page request for these criteria."""
        return PageRequest(
            page_number=page_number,
            rows_per_page=rows_per_page,
            start_time=self.start_time,
            end_time=self.end_time,
            direction=self.direction,
        )


class FilterCriteria(BaseModel):
    """Client-side filter over already fetched orders."""

    status: OrderStatus | None = None
    fee_class: FeeClass | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.status is None and self.fee_class is None
