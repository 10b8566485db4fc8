"""Result types for railway-oriented programming.

Operations that can fail return a Result instead of raising, so callers
decide explicitly where a failure is handled. The suspicious activity
detector relies on this: repository failures surface as Failure values and
are collapsed to "not suspicious" at exactly one call site.

Usage:
    result = await detector.evaluate(
        user_id=user_id,
        session_token=token,
        ip_address="203.0.113.7",
        location="Nairobi",
        device_info=user_agent,
    )
    match result:
        case Success(value=verdict):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation outcome.

    Attributes:
        error: What went wrong.
    """

    error: E


Result: TypeAlias = Union[Success[T], Failure[E]]
