# __init__ for validate utils


from .core import (
    count_duplicate_ids,
    run_validation_checks,
    create_snapshot,
    show_missing_comparison,
)

__all__ = [
    "count_duplicate_ids",
    "run_validation_checks",
    "create_snapshot",
    "show_missing_comparison",
]
