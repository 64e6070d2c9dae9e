"""Shared state and failure handling for the storefront view models."""

import functools
import os
import time

import structlog

logger = structlog.get_logger(__name__)


def boundary(fallback_message: str, default=None, loading: bool = False):
    """Catch anything a view-model operation raises and report it through `error`.

    Every call starts by resetting `error`. Loading operations also flag
    `is_loading` while they run and wait for the configured latency first.
    `default` is returned on an unexpected failure; pass a callable (e.g.
    `list`) for a fresh value.
    """

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            self.error = None
            if loading:
                self.is_loading = True
            try:
                if loading:
                    self._simulate_latency()
                return method(self, *args, **kwargs)
            except Exception:
                logger.exception(
                    "View model operation failed",
                    view_model=type(self).__name__,
                    operation=method.__name__,
                )
                self.error = fallback_message
                return default() if callable(default) else default
            finally:
                if loading:
                    self.is_loading = False

        return wrapper

    return decorator


class ViewModel:
    """Last error, loading flag and simulated latency shared by every view model."""

    def __init__(self, latency: float | None = None):
        if latency is None:
            latency = float(os.environ.get("STOREFRONT_SIMULATED_LATENCY", 0))
        self.latency = latency
        self.error: str | None = None
        self.is_loading = False

    def clear_error(self) -> None:
        self.error = None

    def _simulate_latency(self) -> None:
        if self.latency > 0:
            time.sleep(self.latency)
