"""Gesture and value-observation binding between a view surface and the controller."""

from typing import Any, Callable, Optional, Union

import structlog

from ..controller import InlineEditController
from ..state.models import EditState
from .input_types import InputType, describe_input_type

logger = structlog.get_logger(__name__)

# States in which the surface paints the read-only value
VIEW_SURFACE_STATES = frozenset({
    EditState.DISABLED,
    EditState.VIEW,
    EditState.PENDING,
    EditState.SAVED,
    EditState.ERROR,
})

ENTER_KEY = "Enter"
ESCAPE_KEY = "Escape"


class InlineEditBinding:
    """
    Headless adapter a rendering surface drives.

    Keeps the controller input-type agnostic: input-type capabilities decide
    which gestures become which controller events.
    """

    def __init__(
        self,
        controller: InlineEditController,
        input_type: Union[InputType, str] = InputType.TEXT,
        options: Optional[list[dict[str, Any]]] = None,
        value_key: str = "value",
        label_key: str = "label",
        format: Optional[Callable[[Any], Any]] = None,
        disable_click: bool = False,
        show_new_lines: bool = True
    ) -> None:
        self.controller = controller
        self.descriptor = describe_input_type(input_type)
        self.options = options or []
        self.value_key = value_key
        self.label_key = label_key
        self.format = format
        self.disable_click = disable_click
        self.show_new_lines = show_new_lines

        # Last host value seen; changes are forwarded, repeats are not
        self._observed_value = controller.context.confirmed_value

    @classmethod
    def from_config(
        cls,
        controller: InlineEditController,
        input_params: dict[str, Any],
        options: Optional[list[dict[str, Any]]] = None,
        format: Optional[Callable[[Any], Any]] = None
    ) -> "InlineEditBinding":
        """Create a binding from a merged 'input' configuration section."""
        return cls(
            controller,
            input_type=input_params.get("type", InputType.TEXT.value),
            options=options,
            value_key=input_params.get("value_key", "value"),
            label_key=input_params.get("label_key", "label"),
            format=format,
            disable_click=input_params.get("disable_click", False),
            show_new_lines=input_params.get("show_new_lines", True),
        )

    @property
    def input_type(self) -> InputType:
        return self.descriptor.input_type

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def click(self) -> None:
        if self.disable_click:
            logger.debug("Click ignored", widget_id=self.controller.widget_id, reason="disable_click")
            return
        self.controller.activate()

    def focus(self) -> None:
        self.controller.activate()

    def input_changed(self, value: Any) -> None:
        self.controller.change(value)
        if self.descriptor.auto_confirms_on_change:
            self.controller.confirm()

    def key_down(self, key: str) -> None:
        """Map Enter to confirm (single-line types only) and Escape to cancel."""
        if key == ENTER_KEY and self.descriptor.enter_confirms:
            self.controller.confirm()
        elif key == ESCAPE_KEY:
            self.controller.cancel()

    def blur(self) -> None:
        self.controller.confirm()

    def receive_value(self, value: Any) -> None:
        """
        Observe the host-supplied value.

        A changed value acknowledges a pending save, including one still in
        flight behind a re-opened editor; otherwise it is pushed as the new
        confirmed value. A value the controller already holds as confirmed (an
        optimistic save echoed back) is not forwarded.
        """
        if value == self._observed_value:
            return
        self._observed_value = value

        if value == self.controller.context.confirmed_value:
            return

        if self.controller.state == EditState.PENDING or self.controller.runtime.commit_in_flight:
            self.controller.ack(value)
        else:
            self.controller.push_value(value)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    @property
    def is_editing(self) -> bool:
        return self.controller.state == EditState.EDIT

    @property
    def shows_view(self) -> bool:
        return self.controller.state in VIEW_SURFACE_STATES

    def view_value(self) -> Any:
        """
        Value to paint on the view surface.

        Select values are replaced by their option label, then the format
        callable applies, then multiline text is split into lines.
        """
        value = self.controller.context.confirmed_value

        if self.input_type == InputType.SELECT:
            label = self.option_label(value)
            if label is not None:
                value = label

        if self.format is not None:
            value = self.format(value)

        if self.descriptor.multiline and self.show_new_lines and isinstance(value, str):
            return value.split("\n")

        return value

    def option_label(self, value: Any) -> Optional[Any]:
        """Find the label of the option whose value matches, compared as text."""
        for option in self.options:
            if str(option.get(self.value_key)) == str(value):
                return option.get(self.label_key)
        return None
