"""
Admin Guard Decorators.

Provides a factory that produces a decorator for gating service-layer
functions behind an admin session, plus a method form for services that
hold their ``SessionManager`` as ``self._session``.

Usage::

    from app.auth import SessionManager
    from app.auth_guard import require_admin

    session = SessionManager()
    admin_guard = require_admin(session)

    @admin_guard
    def purge() -> None:
        ...
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, ParamSpec, TypeVar

from app.auth import SessionManager

P = ParamSpec("P")
R = TypeVar("R")


class AuthorizationError(RuntimeError):
    """Raised when a guarded function is called without an admin session."""


def require_admin(session: SessionManager) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return a decorator that enforces the admin role via *session*.

    The returned decorator checks ``session.is_admin`` before every call
    to the wrapped function.  If the current identity is missing or not
    an admin, an :class:`AuthorizationError` is raised.

    Args:
        session: The injectable ``SessionManager`` that holds the
            current identity and role flag.

    Returns:
        A decorator suitable for wrapping service-layer callables.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if not session.is_admin:
                raise AuthorizationError(
                    "Admin access required. Please sign in with an "
                    "administrator account."
                )
            return func(*args, **kwargs)

        return wrapper

    return decorator


def admin_only(method: Callable[..., R]) -> Callable[..., R]:
    """Method decorator: guard with the instance's ``_session``."""

    @wraps(method)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> R:
        return require_admin(self._session)(method)(self, *args, **kwargs)

    return wrapper
