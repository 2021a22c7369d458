# Cross-cutting services package

from .settings import (
    FilterListSettings,
)
from .update_scheduler import (
    UpdateTask,
)

__all__ = [
    # Configuration source
    "FilterListSettings",
    # Periodic task scheduling
    "UpdateTask",
]
