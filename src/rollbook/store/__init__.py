"""Repository composition root."""

from .outcomes import Outcome, RosterStats
from .repository import StudentRepository

__all__ = ["Outcome", "RosterStats", "StudentRepository"]
