"""
Core inline edit state machine logic.

Pure evaluation of one event against the current runtime state. Side effects
(commit callback, timers) are described on the returned StateTransition and
carried out by the controller.
"""

from dataclasses import replace
from typing import Any, Callable, Optional

from .models import (
    STATE_TIMERS,
    EditContext,
    EditorConfig,
    EditorRuntimeState,
    EditState,
    ErrorReason,
    EventType,
    StateTransition,
    TimerKind,
    WidgetEvent,
)

Validate = Callable[[Any], bool]


def initial_runtime(value: Any, cfg: EditorConfig, validate: Validate) -> EditorRuntimeState:
    """Build the runtime state for a freshly constructed controller."""
    context = EditContext(
        confirmed_value=value,
        draft_value=value,
        is_valid=validate(value)
    )
    if cfg.disabled:
        return EditorRuntimeState(
            state=EditState.DISABLED,
            context=context,
            resume_state=EditState.VIEW
        )
    return EditorRuntimeState(state=EditState.VIEW, context=context)


def eval_event(
    rt: EditorRuntimeState,
    event: WidgetEvent,
    cfg: EditorConfig,
    validate: Validate
) -> Optional[StateTransition]:
    """
    Evaluate a single event.

    Args:
        rt: Current runtime state
        event: Inbound event
        cfg: Current configuration
        validate: Draft predicate (already wrapped, never raises)

    Returns:
        StateTransition if the event changes anything, None if it is ignored
    """
    # Configuration and external values apply in every state
    if event.type == EventType.CONFIGURE:
        return eval_configure(rt, event.changes or {}, cfg)
    if event.type == EventType.PUSH_VALUE:
        return eval_push_value(rt, event.value, validate)

    if rt.state == EditState.VIEW:
        return _eval_view(rt, event, validate)
    elif rt.state == EditState.EDIT:
        return _eval_edit(rt, event, cfg, validate)
    elif rt.state == EditState.PENDING:
        return _eval_pending(rt, event, cfg, validate)
    elif rt.state == EditState.SAVED:
        return _eval_saved(rt, event, validate)
    elif rt.state == EditState.ERROR:
        return _eval_error(rt, event, validate)

    # DISABLED ignores every user and timer event; a host ACK still lands
    if event.type == EventType.ACK:
        return _eval_disabled_ack(rt, event, validate)
    return None


def _eval_view(rt: EditorRuntimeState, event: WidgetEvent, validate: Validate) -> Optional[StateTransition]:
    if event.type == EventType.ACTIVATE:
        confirmed = rt.context.confirmed_value
        return StateTransition(
            runtime=rt.with_state(
                EditState.EDIT,
                context=rt.context.reset_to(confirmed, validate(confirmed))
            ),
            trigger="activate"
        )
    if event.type == EventType.ACK:
        return _eval_late_ack(rt, event, validate)
    return None


def _eval_edit(
    rt: EditorRuntimeState,
    event: WidgetEvent,
    cfg: EditorConfig,
    validate: Validate
) -> Optional[StateTransition]:
    if event.type == EventType.CHANGE:
        return StateTransition(
            runtime=rt.with_context(rt.context.with_draft(event.value, validate(event.value))),
            trigger="change"
        )

    if event.type == EventType.CONFIRM:
        return eval_confirm(rt, cfg, validate)

    if event.type == EventType.CANCEL:
        confirmed = rt.context.confirmed_value
        return StateTransition(
            runtime=rt.with_state(
                EditState.VIEW,
                context=rt.context.reset_to(confirmed, validate(confirmed))
            ),
            trigger="cancel"
        )

    if event.type == EventType.ACK:
        return _eval_late_ack(rt, event, validate)

    return None


def eval_confirm(rt: EditorRuntimeState, cfg: EditorConfig, validate: Validate) -> StateTransition:
    """Confirm the draft: reject it, skip an unchanged one, or attempt a commit."""
    draft = rt.context.draft_value
    is_valid = validate(draft)

    if not is_valid:
        # The rejected draft stays visible while ERROR shows; expiry reverts it
        return StateTransition(
            runtime=rt.with_state(
                EditState.ERROR,
                context=rt.context.with_draft(draft, False),
                error_reason=ErrorReason.INVALID_DRAFT
            ),
            trigger="confirm_invalid",
            arm_timer=TimerKind.ERROR_DISPLAY
        )

    # Nothing to persist
    if draft == rt.context.confirmed_value:
        return StateTransition(
            runtime=rt.with_state(EditState.VIEW, context=rt.context.reset_to(draft, is_valid)),
            trigger="confirm_unchanged",
            cancel_timer=True
        )

    # Same value already being persisted: wait for that commit instead of sending it again
    if rt.commit_in_flight and draft == rt.in_flight_value:
        return StateTransition(
            runtime=rt.with_state(EditState.PENDING, context=rt.context.with_draft(draft, True)),
            trigger="rejoin_pending",
            arm_timer=TimerKind.SAVE_TIMEOUT
        )

    if cfg.optimistic:
        return StateTransition(
            runtime=rt.with_state(
                EditState.SAVED, context=rt.context.reset_to(draft, True)
            ).with_commit_resolved(),
            trigger="commit_optimistic",
            arm_timer=TimerKind.SAVED_DISPLAY,
            should_commit=True,
            commit_value=draft
        )

    return StateTransition(
        runtime=rt.with_state(
            EditState.PENDING, context=rt.context.with_draft(draft, True)
        ).with_commit_in_flight(draft),
        trigger="commit_pessimistic",
        arm_timer=TimerKind.SAVE_TIMEOUT,
        should_commit=True,
        commit_value=draft
    )


def eval_commit_failed(rt: EditorRuntimeState, transition: StateTransition) -> StateTransition:
    """Replace a commit transition whose callback raised with an error transition."""
    # The draft keeps the value that failed to persist while ERROR shows
    context = EditContext(
        confirmed_value=rt.context.confirmed_value,
        draft_value=transition.commit_value,
        is_valid=True
    )
    return StateTransition(
        runtime=rt.with_state(EditState.ERROR, context=context, error_reason=ErrorReason.COMMIT_FAILED),
        trigger="commit_failed",
        arm_timer=TimerKind.ERROR_DISPLAY
    )


def _eval_pending(
    rt: EditorRuntimeState,
    event: WidgetEvent,
    cfg: EditorConfig,
    validate: Validate
) -> Optional[StateTransition]:
    if event.type == EventType.ACK:
        confirmed = rt.context.draft_value if event.value is None else event.value
        return StateTransition(
            runtime=rt.with_state(
                EditState.SAVED, context=rt.context.reset_to(confirmed, True)
            ).with_commit_resolved(),
            trigger="ack",
            arm_timer=TimerKind.SAVED_DISPLAY
        )

    if event.type == EventType.TIMER_EXPIRED and event.timer_kind == TimerKind.SAVE_TIMEOUT:
        # The timed-out draft stays visible while ERROR shows; expiry reverts it
        return StateTransition(
            runtime=rt.with_state(EditState.ERROR, error_reason=ErrorReason.SAVE_TIMEOUT).with_commit_resolved(),
            trigger="save_timeout",
            arm_timer=TimerKind.ERROR_DISPLAY
        )

    if event.type == EventType.ACTIVATE and cfg.allow_edit_while_pending:
        # The commit stays tracked without a timeout; its ACK lands in the overlay
        return StateTransition(
            runtime=rt.with_state(EditState.EDIT),
            trigger="activate_while_pending",
            cancel_timer=True
        )

    # Draft is frozen until the commit resolves
    return None


def _eval_saved(rt: EditorRuntimeState, event: WidgetEvent, validate: Validate) -> Optional[StateTransition]:
    if event.type == EventType.TIMER_EXPIRED and event.timer_kind == TimerKind.SAVED_DISPLAY:
        confirmed = rt.context.confirmed_value
        return StateTransition(
            runtime=rt.with_state(EditState.VIEW, context=rt.context.reset_to(confirmed, validate(confirmed))),
            trigger="saved_elapsed"
        )
    if event.type == EventType.ACK:
        return _eval_late_ack(rt, event, validate)
    return None


def _eval_error(rt: EditorRuntimeState, event: WidgetEvent, validate: Validate) -> Optional[StateTransition]:
    if event.type == EventType.TIMER_EXPIRED and event.timer_kind == TimerKind.ERROR_DISPLAY:
        confirmed = rt.context.confirmed_value
        return StateTransition(
            runtime=rt.with_state(EditState.EDIT, context=rt.context.reset_to(confirmed, validate(confirmed))),
            trigger="error_elapsed"
        )
    if event.type == EventType.ACK:
        return _eval_late_ack(rt, event, validate)
    return None


def _eval_late_ack(rt: EditorRuntimeState, event: WidgetEvent, validate: Validate) -> Optional[StateTransition]:
    """
    ACK outside PENDING.

    Resolves a commit still in flight (after editing was re-opened) without
    touching the draft. Otherwise a carried value is treated as an external
    push and a bare ACK is ignored.
    """
    if rt.commit_in_flight:
        confirmed = rt.in_flight_value if event.value is None else event.value
        if rt.state == EditState.VIEW:
            context = rt.context.reset_to(confirmed, validate(confirmed))
        else:
            context = rt.context.with_confirmed(confirmed)
        return StateTransition(
            runtime=rt.with_context(context).with_commit_resolved(),
            trigger="ack_in_flight"
        )

    if event.value is None:
        return None
    return eval_push_value(rt, event.value, validate)


def _eval_disabled_ack(rt: EditorRuntimeState, event: WidgetEvent, validate: Validate) -> Optional[StateTransition]:
    """ACK while DISABLED: settle the remembered state so enabling does not replay the wait."""
    if rt.commit_in_flight and rt.resume_state == EditState.PENDING:
        confirmed = rt.context.draft_value if event.value is None else event.value
        runtime = replace(
            rt,
            context=rt.context.reset_to(confirmed, True),
            resume_state=EditState.SAVED
        ).with_commit_resolved()
        return StateTransition(runtime=runtime, trigger="ack_while_disabled")

    if rt.commit_in_flight:
        confirmed = rt.in_flight_value if event.value is None else event.value
        if rt.resume_state in (EditState.EDIT, EditState.ERROR):
            context = rt.context.with_confirmed(confirmed)
        else:
            context = rt.context.reset_to(confirmed, validate(confirmed))
        return StateTransition(
            runtime=rt.with_context(context).with_commit_resolved(),
            trigger="ack_while_disabled"
        )

    if event.value is None:
        return None
    return eval_push_value(rt, event.value, validate)


def eval_push_value(rt: EditorRuntimeState, value: Any, validate: Validate) -> StateTransition:
    """Apply an externally pushed confirmed value."""
    state = rt.state

    if state == EditState.DISABLED:
        # Disabled keeps the remembered state; reset the display unless it was editing
        if rt.resume_state in (EditState.EDIT, EditState.PENDING):
            runtime = rt.with_context(rt.context.with_confirmed(value))
        else:
            runtime = replace(
                rt,
                context=rt.context.reset_to(value, validate(value)),
                resume_state=EditState.VIEW,
                error_reason=None
            )
        return StateTransition(runtime=runtime, trigger="push_value")

    if state in (EditState.EDIT, EditState.PENDING):
        # Local intent wins over late external pushes
        return StateTransition(
            runtime=rt.with_context(rt.context.with_confirmed(value)),
            trigger="push_value"
        )

    # VIEW, SAVED, ERROR: reset display and settle in VIEW
    return StateTransition(
        runtime=rt.with_state(EditState.VIEW, context=rt.context.reset_to(value, validate(value))),
        trigger="push_value",
        cancel_timer=state != EditState.VIEW
    )


def eval_configure(
    rt: EditorRuntimeState,
    changes: dict[str, Any],
    cfg: EditorConfig
) -> StateTransition:
    """Apply a configuration update, entering or leaving DISABLED as needed."""
    new_cfg = cfg.with_changes(**changes)

    if new_cfg.disabled and rt.state != EditState.DISABLED:
        return StateTransition(
            runtime=replace(rt, state=EditState.DISABLED, resume_state=rt.state),
            trigger="disable",
            cancel_timer=True,
            config=new_cfg
        )

    if not new_cfg.disabled and rt.state == EditState.DISABLED:
        resume = rt.resume_state or EditState.VIEW
        return StateTransition(
            runtime=replace(rt, state=resume, resume_state=None),
            trigger="enable",
            # Re-entering a timed state re-arms its timer in full
            arm_timer=STATE_TIMERS.get(resume),
            config=new_cfg
        )

    return StateTransition(runtime=rt, trigger="configure", config=new_cfg)
