"""Input type descriptors consumed by the binding layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class InputType(str, Enum):
    """Concrete editors a rendering surface can paint."""
    TEXT = "text"
    SELECT = "select"
    TEXTAREA = "textarea"


@dataclass(frozen=True)
class InputTypeDescriptor:
    """Capabilities of an input type."""
    input_type: InputType
    auto_confirms_on_change: bool = False           # Picking a value is the whole edit
    enter_confirms: bool = True                     # Enter key commits the draft
    multiline: bool = False


_DESCRIPTORS: dict[InputType, InputTypeDescriptor] = {
    InputType.TEXT: InputTypeDescriptor(InputType.TEXT),
    InputType.SELECT: InputTypeDescriptor(InputType.SELECT, auto_confirms_on_change=True),
    InputType.TEXTAREA: InputTypeDescriptor(InputType.TEXTAREA, enter_confirms=False, multiline=True),
}


def describe_input_type(input_type: Union[InputType, str]) -> InputTypeDescriptor:
    """Get the descriptor for an input type or its string name."""
    return _DESCRIPTORS[InputType(input_type)]
