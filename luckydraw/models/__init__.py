from .base import Base

# import models so Alembic/autoloaders can discover mappers
from .student import Student  # noqa: F401

__all__ = [
    "Base",
    "Student",
]
