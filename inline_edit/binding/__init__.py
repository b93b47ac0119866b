"""
Headless input binding.

Translates rendering-surface gestures (click, focus, keys, blur, input
changes) and observed host values into controller events.
"""
from .input_types import InputType, InputTypeDescriptor, describe_input_type
from .surface import InlineEditBinding

__all__ = ["InlineEditBinding", "InputType", "InputTypeDescriptor", "describe_input_type"]
