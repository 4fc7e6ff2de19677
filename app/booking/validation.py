"""Ordered validation pipeline for booking requests.

A request is checked against a fixed sequence of rules. Evaluation stops at
the first failing rule and raises that rule's error, so the order of the
rules decides which message a malformed request receives.
"""

import inspect
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from app.booking.policy import (
    BusinessHours,
    business_hours_message,
    is_on_the_hour,
    is_within_business_hours,
)
from app.core.errors import AppError, DomainValidationError
from app.models.booking import BookingStatus
from app.utils.time import parse_date, parse_datetime, utc_now


@dataclass
class BookingDraft:
    """Candidate booking travelling through the pipeline.

    Raw request fields go in; parsing rules fill in the typed fields and
    lookup rules fill in the resolved ids.
    """

    user_id: str
    service_ref: str | None = None
    specialist_ref: str | None = None
    raw_service_date: str | None = None
    raw_start_time: str | None = None
    raw_end_time: str | None = None
    now: datetime = field(default_factory=utc_now)
    hours: BusinessHours = field(default_factory=BusinessHours.from_settings)

    service_date: date | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    specialist_id: str | None = None
    service_id: str | None = None
    exclude_booking_id: str | None = None

    def as_record(self) -> dict:
        """Normalized values ready for persistence."""
        return {
            "user_id": self.user_id,
            "service_id": self.service_id,
            "specialist_id": self.specialist_id,
            "service_date": self.service_date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "status": BookingStatus.BOOKED,
        }


RuleCheck = Callable[[BookingDraft], bool | Awaitable[bool]]


@dataclass(frozen=True)
class Rule:
    """One step of the pipeline: a predicate and the error it raises."""

    name: str
    check: RuleCheck
    error: type[AppError]
    message: str | Callable[[BookingDraft], str]

    def failure(self, draft: BookingDraft) -> AppError:
        message = self.message(draft) if callable(self.message) else self.message
        return self.error(message)


def has_required_fields(draft: BookingDraft) -> bool:
    return all(
        [
            draft.service_ref,
            draft.specialist_ref,
            draft.raw_service_date,
            draft.raw_start_time,
            draft.raw_end_time,
        ]
    )


def parses_as_instants(draft: BookingDraft) -> bool:
    try:
        draft.start_time = parse_datetime(draft.raw_start_time)
        draft.end_time = parse_datetime(draft.raw_end_time)
        draft.service_date = parse_date(draft.raw_service_date)
    except (TypeError, ValueError):
        return False
    return True


def ends_after_start(draft: BookingDraft) -> bool:
    return draft.end_time > draft.start_time


def starts_in_future(draft: BookingDraft) -> bool:
    return draft.start_time >= draft.now


def starts_on_the_hour(draft: BookingDraft) -> bool:
    return is_on_the_hour(draft.start_time, draft.hours)


def starts_within_business_hours(draft: BookingDraft) -> bool:
    return is_within_business_hours(draft.start_time, draft.hours)


# Steps that need no database access, in their fixed order
FIELD_RULES: tuple[Rule, ...] = (
    Rule(
        "required_fields",
        has_required_fields,
        DomainValidationError,
        "Missing required fields",
    ),
    Rule(
        "valid_instants",
        parses_as_instants,
        DomainValidationError,
        "Invalid date format",
    ),
    Rule(
        "end_after_start",
        ends_after_start,
        DomainValidationError,
        "endTime must be after startTime",
    ),
    Rule(
        "not_in_past",
        starts_in_future,
        DomainValidationError,
        "startTime cannot be in the past",
    ),
    Rule(
        "on_the_hour",
        starts_on_the_hour,
        DomainValidationError,
        "Bookings must start on the hour",
    ),
    Rule(
        "business_hours",
        starts_within_business_hours,
        DomainValidationError,
        lambda draft: business_hours_message(draft.hours),
    ),
)


async def run_rules(rules: Sequence[Rule], draft: BookingDraft) -> BookingDraft:
    """Evaluate ``rules`` in order, raising the first failure.

    Checks may be plain or async callables.

    Returns:
        The same draft, populated by the rules that ran

    Raises:
        AppError: The error of the first rule whose check returned False
    """
    for rule in rules:
        result = rule.check(draft)
        if inspect.isawaitable(result):
            result = await result
        if not result:
            raise rule.failure(draft)
    return draft
