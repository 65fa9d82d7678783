"""Tagged results returned by the hypermedia client.

Every client call resolves to exactly one of:

- ``Ok(value)``        the request succeeded
- ``Redirecting()``    a 401 was handed to the auth-error callback; the host
                       is navigating away and the caller should stop
- ``Failed(error)``    the transport or server reported an ApiClientError
- ``Invalid(errors)``  client-side validation rejected the data; no request
                       was made

Callers branch on ``kind`` (or ``isinstance``), or call ``unwrap()`` to get
the value and let anything else raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar, Union

from halkit.errors import ApiClientError, AuthRedirectError, ValidationFailedError
from halkit.models import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    kind: Literal["ok"] = field(default="ok", init=False)

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Redirecting:
    kind: Literal["redirecting"] = field(default="redirecting", init=False)

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> None:
        raise AuthRedirectError()


@dataclass(frozen=True)
class Failed:
    error: ApiClientError
    kind: Literal["failed"] = field(default="failed", init=False)

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> None:
        raise self.error


@dataclass(frozen=True)
class Invalid:
    errors: list[ValidationError]
    kind: Literal["invalid"] = field(default="invalid", init=False)

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> None:
        raise ValidationFailedError(self.errors)


Outcome = Union[Ok[T], Redirecting, Failed, Invalid]

__all__ = ["Failed", "Invalid", "Ok", "Outcome", "Redirecting"]
