"""
User interface components for kubectl-ai.
"""

from kubectl_ai.ui.confirmation import (
    APPLY,
    DONT_APPLY,
    Selector,
    RichSelector,
    confirm_apply,
)

__all__ = [
    "APPLY",
    "DONT_APPLY",
    "Selector",
    "RichSelector",
    "confirm_apply",
]
