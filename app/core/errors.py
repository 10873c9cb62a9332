import functools
import logging

from sqlmodel import Session


logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Raised by the access modules when the store call fails."""


class NotFoundError(DomainError):
    """The row targeted by an update/delete does not exist."""


def store_errors(message: str):
    """Wrap an access function: roll back, log and re-raise as DomainError.

    The wrapped function must take the SQLModel session as first argument.
    NotFoundError passes through untouched so handlers can answer 404.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(session: Session, *args, **kwargs):
            try:
                return func(session, *args, **kwargs)
            except NotFoundError:
                session.rollback()
                raise
            except Exception as exc:
                session.rollback()
                logger.error("%s error: %s", func.__name__, exc)
                raise DomainError(message) from exc

        return wrapper

    return decorator
