"""Default configuration parameters for inline edit widgets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EditorParams:
    """Lifecycle controller parameters matching EditorConfig from state.models."""
    disabled: bool = False
    allow_edit_while_pending: bool = False          # Re-open the editor during a pending save
    mode: str = "optimistic"                        # optimistic | pessimistic

    # Feedback timings
    save_timeout_ms: int = 2000                     # Wait for ACK before failing
    saved_duration_ms: int = 700                    # Saved feedback display
    error_duration_ms: int = 1000                   # Error feedback display


@dataclass(frozen=True)
class InputParams:
    """Input binding parameters."""
    type: str = "text"                              # text | select | textarea
    show_new_lines: bool = True                     # Split multiline view values
    disable_click: bool = False                     # Ignore clicks on the view surface
    value_key: str = "value"                        # Select option value field
    label_key: str = "label"                        # Select option label field


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    editor: EditorParams
    input: InputParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        editor=EditorParams(),
        input=InputParams(),
    )
