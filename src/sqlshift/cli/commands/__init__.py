"""Command implementations for sqlshift CLI."""

from .common import add_common_arguments, apply_overrides
from .migrate import add_migrate_arguments, handle_migrate
from .status import handle_resolve, handle_status

__all__ = [
    "add_common_arguments",
    "apply_overrides",
    "add_migrate_arguments",
    "handle_migrate",
    "handle_status",
    "handle_resolve",
]
