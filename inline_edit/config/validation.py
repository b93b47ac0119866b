"""Configuration validation utilities."""

from dataclasses import fields
from typing import Any

from ..errors import ValidationError
from .defaults import EditorParams, InputParams

EDITOR_FIELDS = {f.name for f in fields(EditorParams)}
INPUT_FIELDS = {f.name for f in fields(InputParams)}

VALID_MODES = ("optimistic", "pessimistic")
VALID_INPUT_TYPES = ("text", "select", "textarea")


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def _check_unknown(params: dict[str, Any], known: set[str], section: str) -> list[ValidationError]:
        return [
            ValidationError(field=f"{section}.{key}", message="Unknown field", value=params[key])
            for key in params
            if key not in known
        ]

    @staticmethod
    def validate_editor_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate lifecycle controller parameters."""
        errors = ConfigValidator._check_unknown(params, EDITOR_FIELDS, "editor")

        for flag in ("disabled", "allow_edit_while_pending"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=flag,
                    message="Must be a boolean",
                    value=params[flag]
                ))

        if "mode" in params:
            value = params["mode"]
            # CommitMode members are str subclasses
            if not isinstance(value, str) or value not in VALID_MODES:
                errors.append(ValidationError(
                    field="mode",
                    message=f"Must be one of {', '.join(VALID_MODES)}",
                    value=value
                ))

        for duration in ("save_timeout_ms", "saved_duration_ms", "error_duration_ms"):
            if duration in params:
                value = params[duration]
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    errors.append(ValidationError(
                        field=duration,
                        message="Must be a non-negative integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_input_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate input binding parameters."""
        errors = ConfigValidator._check_unknown(params, INPUT_FIELDS, "input")

        if "type" in params and params["type"] not in VALID_INPUT_TYPES:
            errors.append(ValidationError(
                field="type",
                message=f"Must be one of {', '.join(VALID_INPUT_TYPES)}",
                value=params["type"]
            ))

        for flag in ("show_new_lines", "disable_click"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=flag,
                    message="Must be a boolean",
                    value=params[flag]
                ))

        for key in ("value_key", "label_key"):
            if key in params and (not isinstance(params[key], str) or not params[key]):
                errors.append(ValidationError(
                    field=key,
                    message="Must be a non-empty string",
                    value=params[key]
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        sections = (
            ("editor", ConfigValidator.validate_editor_params),
            ("input", ConfigValidator.validate_input_params),
        )
        for section, validate in sections:
            if section not in config:
                continue
            if not isinstance(config[section], dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=config[section]
                ))
                continue
            errors.extend(validate(config[section]))

        return errors
