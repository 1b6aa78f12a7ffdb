"""ORM models aggregate exports."""
from .catalog import (  # noqa: F401
    Base,
    BookRecord,
    ReadingListRecord,
    ReviewRecord,
)

__all__ = [
    "Base",
    "BookRecord",
    "ReadingListRecord",
    "ReviewRecord",
]
