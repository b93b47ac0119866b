"""
Inline Edit - Editable Value Lifecycle Controller

A headless state machine for inline-editable values. Owns the draft value,
arbitrates optimistic and pessimistic commits, coordinates validation and
schedules the timed save/saved/error feedback transitions.
"""

from .controller import InlineEditController
from .state.models import CommitMode, EditorConfig, EditorSnapshot, EditState

__version__ = "0.1.0"
__author__ = "Inline Edit Team"

__all__ = [
    "InlineEditController",
    "CommitMode",
    "EditorConfig",
    "EditorSnapshot",
    "EditState",
]
