from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from nagarconnect.core.errors import AppError, Conflict, InternalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Value-or-error returned by the service layer.

    Routers call ``unwrap()``; the raised ``AppError`` is rendered by the
    single handler in ``core.errors``.
    """

    value: Optional[T] = None
    error: Optional[AppError] = None

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: AppError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


def returns_outcome(method):
    """Wrap a service method so it returns an ``Outcome`` instead of raising.

    ``AppError`` passes through as the failure; unique-constraint violations
    become ``Conflict`` and any other database failure ``InternalError``.
    The owning service's session is rolled back on database failures.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return Outcome.ok(method(self, *args, **kwargs))
        except AppError as exc:
            return Outcome.fail(exc)
        except IntegrityError as exc:
            _rollback(self)
            logger.info("%s hit a unique constraint: %s", method.__qualname__, exc.orig)
            return Outcome.fail(Conflict())
        except SQLAlchemyError:
            _rollback(self)
            logger.exception("%s failed", method.__qualname__)
            return Outcome.fail(InternalError())

    return wrapper


def _rollback(service) -> None:
    session = getattr(service, "session", None)
    if session is not None:
        session.rollback()
