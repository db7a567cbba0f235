"""Business logic services."""

from .dispatcher import Dispatcher

__all__ = ["Dispatcher"]
