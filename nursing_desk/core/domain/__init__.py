"""Domain building blocks shared by all domains."""

from .entities import Entity
from .exceptions import (
    DomainException,
    InvalidStatusTransitionException,
    ValidationException,
)

__all__ = [
    "Entity",
    "DomainException",
    "ValidationException",
    "InvalidStatusTransitionException",
]
