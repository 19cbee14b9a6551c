"""CLI cancellation handling."""

import sys
from functools import wraps
from typing import Any, Callable, TypeVar

__all__ = ["handle_keyboard_interrupt"]

T = TypeVar("T")


def handle_keyboard_interrupt() -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to handle Ctrl+C in CLI commands.

    Catches KeyboardInterrupt and exits with status 130 (128 + SIGINT).
    The temporary workspace is already gone by then, since its context
    manager unwinds before the interrupt reaches this wrapper.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                sys.exit(130)

        return wrapper

    return decorator
