"""
Date Validation Rules for the Valora validation engine

Date rules adapt their input before checking it, since the materializer copies
raw values verbatim. Accepted inputs:

- ``datetime`` values, used as is
- ``date`` values, taken at midnight
- ISO 8601 strings, parsed with ``datetime.fromisoformat``
- integer or float POSIX timestamps, interpreted in UTC

Anything else fails the rule. When one side of a comparison is timezone-aware
and the other naive, the naive one is taken as UTC.

Rules that depend on the current time accept a ``clock`` callable so that
callers and tests can pin "now".
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Optional, Union

from ..exceptions import ConfigurationError
from ..models import ValidationContext
from .base import ValidationRule

DateLike = Union[datetime, date, str, int, float]
Clock = Callable[[], datetime]


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Convert a date-like value to a datetime.

    Args:
        value: Candidate value

    Returns:
        The converted datetime, or None if the value is not date-like
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def _align(left: datetime, right: datetime):
    """Make two datetimes comparable."""
    if (left.tzinfo is None) == (right.tzinfo is None):
        return left, right
    if left.tzinfo is None:
        return left.replace(tzinfo=timezone.utc), right
    return left, right.replace(tzinfo=timezone.utc)


def _bound(value: DateLike) -> datetime:
    converted = to_datetime(value)
    if converted is None:
        raise ConfigurationError(f"not a date: {value!r}")
    return converted


class DateRule(ValidationRule):
    """Base class for rules that only accept date-like values."""

    def check(self, value: Any, context: ValidationContext) -> bool:
        moment = to_datetime(value)
        if moment is None:
            return False
        return self.test(moment)

    def test(self, value: datetime) -> bool:
        """Check a converted datetime."""
        return True

    def now(self) -> datetime:
        clock = self.params.get("clock")
        return clock() if clock is not None else datetime.now()


class IsDateRule(DateRule):
    name = "isDate"
    default_message = "Must be a valid date"


class MinDateRule(DateRule):
    name = "minDate"
    default_message = "Must be on or after {date}"

    def __init__(self, min_date: DateLike, message: Optional[str] = None):
        super().__init__(message, date=_bound(min_date))

    def test(self, value: datetime) -> bool:
        value, bound = _align(value, self.date)
        return value >= bound


class MaxDateRule(DateRule):
    name = "maxDate"
    default_message = "Must be on or before {date}"

    def __init__(self, max_date: DateLike, message: Optional[str] = None):
        super().__init__(message, date=_bound(max_date))

    def test(self, value: datetime) -> bool:
        value, bound = _align(value, self.date)
        return value <= bound


class IsAfterRule(DateRule):
    name = "isAfter"
    default_message = "Must be after {date}"

    def __init__(self, after: DateLike, message: Optional[str] = None):
        super().__init__(message, date=_bound(after))

    def test(self, value: datetime) -> bool:
        value, bound = _align(value, self.date)
        return value > bound


class IsBeforeRule(DateRule):
    name = "isBefore"
    default_message = "Must be before {date}"

    def __init__(self, before: DateLike, message: Optional[str] = None):
        super().__init__(message, date=_bound(before))

    def test(self, value: datetime) -> bool:
        value, bound = _align(value, self.date)
        return value < bound


class IsPastRule(DateRule):
    name = "past"
    default_message = "Must be a past date"

    def __init__(self, message: Optional[str] = None, clock: Optional[Clock] = None):
        super().__init__(message, clock=clock)

    def test(self, value: datetime) -> bool:
        value, now = _align(value, self.now())
        return value < now


class IsFutureRule(DateRule):
    name = "future"
    default_message = "Must be a future date"

    def __init__(self, message: Optional[str] = None, clock: Optional[Clock] = None):
        super().__init__(message, clock=clock)

    def test(self, value: datetime) -> bool:
        value, now = _align(value, self.now())
        return value > now


class IsTodayRule(DateRule):
    name = "today"
    default_message = "Must be today"

    def __init__(self, message: Optional[str] = None, clock: Optional[Clock] = None):
        super().__init__(message, clock=clock)

    def test(self, value: datetime) -> bool:
        return value.date() == self.now().date()


class IsWeekdayRule(DateRule):
    name = "weekday"
    default_message = "Must be a weekday"

    def test(self, value: datetime) -> bool:
        return value.weekday() < 5


class IsWeekendRule(DateRule):
    name = "weekend"
    default_message = "Must be a weekend day"

    def test(self, value: datetime) -> bool:
        return value.weekday() >= 5


def age_in_years(born: datetime, today: datetime) -> int:
    """Return the number of full years between two dates."""
    years = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        years -= 1
    return years


class MinAgeRule(DateRule):
    name = "minAge"
    default_message = "Must be at least {years} years old"

    def __init__(self, years: int, message: Optional[str] = None, clock: Optional[Clock] = None):
        super().__init__(message, years=years, clock=clock)

    def test(self, value: datetime) -> bool:
        return age_in_years(value, self.now()) >= self.years


class MaxAgeRule(DateRule):
    name = "maxAge"
    default_message = "Must be at most {years} years old"

    def __init__(self, years: int, message: Optional[str] = None, clock: Optional[Clock] = None):
        super().__init__(message, years=years, clock=clock)

    def test(self, value: datetime) -> bool:
        return age_in_years(value, self.now()) <= self.years


class WithinRule(DateRule):
    """Rule requiring the value to lie within a window around now."""

    name = "within"
    default_message = "Must be within {window} of now"

    def __init__(self, window: timedelta, message: Optional[str] = None, clock: Optional[Clock] = None):
        super().__init__(message, window=window, clock=clock)

    def test(self, value: datetime) -> bool:
        value, now = _align(value, self.now())
        return abs(now - value) <= self.window


def is_date(message: Optional[str] = None) -> IsDateRule:
    return IsDateRule(message)


def min_date(value: DateLike, message: Optional[str] = None) -> MinDateRule:
    return MinDateRule(value, message)


def max_date(value: DateLike, message: Optional[str] = None) -> MaxDateRule:
    return MaxDateRule(value, message)


def is_after(value: DateLike, message: Optional[str] = None) -> IsAfterRule:
    return IsAfterRule(value, message)


def is_before(value: DateLike, message: Optional[str] = None) -> IsBeforeRule:
    return IsBeforeRule(value, message)


def is_past(message: Optional[str] = None, clock: Optional[Clock] = None) -> IsPastRule:
    return IsPastRule(message, clock)


def is_future(message: Optional[str] = None, clock: Optional[Clock] = None) -> IsFutureRule:
    return IsFutureRule(message, clock)


def is_today(message: Optional[str] = None, clock: Optional[Clock] = None) -> IsTodayRule:
    return IsTodayRule(message, clock)


def is_weekday(message: Optional[str] = None) -> IsWeekdayRule:
    return IsWeekdayRule(message)


def is_weekend(message: Optional[str] = None) -> IsWeekendRule:
    return IsWeekendRule(message)


def min_age(years: int, message: Optional[str] = None, clock: Optional[Clock] = None) -> MinAgeRule:
    return MinAgeRule(years, message, clock)


def max_age(years: int, message: Optional[str] = None, clock: Optional[Clock] = None) -> MaxAgeRule:
    return MaxAgeRule(years, message, clock)


def within(window: timedelta, message: Optional[str] = None, clock: Optional[Clock] = None) -> WithinRule:
    return WithinRule(window, message, clock)
