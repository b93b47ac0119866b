"""
Inline edit lifecycle controller.

Owns the editable-value context and drives the lifecycle state machine:
View → Edit → (Pending) → Saved / Error → View.

Events from the rendering layer, the host application and the timer service
are funnelled into a single FIFO queue and processed one at a time to
completion. Events sent while another is being processed (from a commit
callback, a listener or a timer thread) wait their turn.
"""

import threading
import uuid
from collections import deque
from dataclasses import asdict
from typing import Any, Callable, Optional

import structlog

from .adapters import CommitAdapter, Validator
from .config.validation import ConfigValidator
from .errors import CommitFailedError, ConfigurationError
from .logging.config import log_event_ignored
from .state.machine import eval_commit_failed, eval_event, initial_runtime
from .state.models import (
    STATE_TIMERS,
    EditContext,
    EditorConfig,
    EditorRuntimeState,
    EditorSnapshot,
    EditState,
    EventType,
    StateTransition,
    TimerKind,
    WidgetEvent,
)
from .state.transitions import StateTransitionHandler
from .timers import BaseTimerService, ThreadingTimerService

logger = structlog.get_logger(__name__)

Listener = Callable[[EditorSnapshot], None]


class InlineEditController:
    """
    Finite-state lifecycle controller for one inline edit widget.

    Args:
        value: Initial confirmed value supplied by the host
        config: Editor configuration (defaults to EditorConfig())
        validate: Optional draft predicate
        on_commit: Host persistence callback, invoked once per commit attempt
        timer_service: Timer backend (defaults to a threading timer)
        widget_id: Identifier used in logs
    """

    def __init__(
        self,
        value: Any,
        config: Optional[EditorConfig] = None,
        validate: Optional[Callable[[Any], bool]] = None,
        on_commit: Optional[Callable[[Any], Any]] = None,
        timer_service: Optional[BaseTimerService] = None,
        widget_id: Optional[str] = None
    ) -> None:
        self.widget_id = widget_id or f"widget-{uuid.uuid4().hex[:8]}"
        self.config = config or EditorConfig()

        errors = ConfigValidator.validate_editor_params(asdict(self.config))
        if errors:
            raise ConfigurationError("Invalid editor configuration", errors=errors)

        self.logger = logger.bind(widget_id=self.widget_id)
        self.validator = Validator(validate)
        self.commit_adapter = CommitAdapter(on_commit)
        self.timers = timer_service or ThreadingTimerService(name=self.widget_id)
        self.transition_handler = StateTransitionHandler()

        self._runtime = initial_runtime(value, self.config, self.validator)
        self._listeners: list[Listener] = []

        # Single-consumer event queue
        self._queue: deque[WidgetEvent] = deque()
        self._queue_lock = threading.Lock()
        self._draining = False

        # Controller-side view of the live timer
        self._timer_generation = 0
        self._timer_ticket: Optional[int] = None
        self._timer_kind: Optional[TimerKind] = None

        self._disposed = False

        self.logger.info(
            "Inline edit controller initialized",
            initial_state=self._runtime.state.value,
            mode=self.config.mode.value
        )

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> EditState:
        return self._runtime.state

    @property
    def context(self) -> EditContext:
        return self._runtime.context

    @property
    def runtime(self) -> EditorRuntimeState:
        return self._runtime

    @property
    def timer_kind(self) -> Optional[TimerKind]:
        """Kind of the live timer, if one is armed."""
        return self._timer_kind

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def snapshot(self) -> EditorSnapshot:
        """Read-only state and context for the rendering layer."""
        return EditorSnapshot.from_runtime(self._runtime)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every processed event.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def activate(self) -> None:
        self.send(WidgetEvent(EventType.ACTIVATE))

    def change(self, value: Any) -> None:
        self.send(WidgetEvent(EventType.CHANGE, value=value))

    def confirm(self) -> None:
        self.send(WidgetEvent(EventType.CONFIRM))

    def cancel(self) -> None:
        self.send(WidgetEvent(EventType.CANCEL))

    def ack(self, value: Any = None) -> None:
        """Acknowledge a pessimistic commit, optionally with the persisted value."""
        self.send(WidgetEvent(EventType.ACK, value=value))

    def push_value(self, value: Any) -> None:
        """Push a new externally confirmed value."""
        self.send(WidgetEvent(EventType.PUSH_VALUE, value=value))

    def configure(self, **changes: Any) -> None:
        """
        Update configuration fields (disabled, mode, timings, ...).

        Raises:
            ConfigurationError: If a field is unknown or has an invalid value
        """
        errors = ConfigValidator.validate_editor_params(changes)
        if errors:
            raise ConfigurationError("Invalid configuration update", errors=errors)
        self.send(WidgetEvent(EventType.CONFIGURE, changes=dict(changes)))

    def send(self, event: WidgetEvent) -> None:
        """Queue an event and process the queue unless another caller already is."""
        if self._disposed:
            self.logger.debug("Event dropped after dispose", event_type=event.type.value)
            return

        with self._queue_lock:
            self._queue.append(event)
            if self._draining:
                return
            self._draining = True

        try:
            while True:
                with self._queue_lock:
                    if not self._queue or self._disposed:
                        self._queue.clear()
                        self._draining = False
                        return
                    next_event = self._queue.popleft()
                self._process(next_event)
        except BaseException:
            with self._queue_lock:
                self._queue.clear()
                self._draining = False
            raise

    def dispose(self) -> None:
        """Cancel any pending timer and stop accepting events."""
        if self._disposed:
            return
        self._disposed = True
        self.timers.close()
        self._timer_ticket = None
        self._timer_kind = None
        self._listeners.clear()
        self.logger.info(
            "Inline edit controller disposed",
            final_state=self._runtime.state.value,
            validations=self.validator.call_count,
            commit_attempts=self.commit_adapter.attempt_count,
            commit_failures=self.commit_adapter.failure_count
        )

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def _process(self, event: WidgetEvent) -> None:
        if event.type == EventType.TIMER_EXPIRED:
            if event.ticket is None or event.ticket != self._timer_ticket:
                log_event_ignored(self.logger, self.widget_id, self.state.value,
                                  event.type.value, "stale_timer")
                return
            self._timer_ticket = None
            self._timer_kind = None

        transition = eval_event(self._runtime, event, self.config, self.validator)

        if transition is None:
            log_event_ignored(self.logger, self.widget_id, self.state.value,
                              event.type.value, "not_handled_in_state")
        else:
            self._apply(transition)

        self._notify()

    def _apply(self, transition: StateTransition) -> None:
        if transition.should_commit:
            try:
                self.commit_adapter.attempt(transition.commit_value)
            except CommitFailedError as e:
                self.logger.error(
                    "Commit attempt failed",
                    error=str(e),
                    attempt=self.commit_adapter.attempt_count,
                    failures=self.commit_adapter.failure_count
                )
                transition = eval_commit_failed(self._runtime, transition)

        self._runtime = self.transition_handler.apply_transition(
            self._runtime, transition, self.widget_id
        )

        if transition.config is not None:
            self.config = transition.config

        if transition.arm_timer is not None:
            self._arm_timer(transition.arm_timer)
        elif transition.cancel_timer or (
            self._timer_kind is not None and STATE_TIMERS.get(self.state) != self._timer_kind
        ):
            # A live timer belongs to the state it was armed for
            self._cancel_timer()

    def _arm_timer(self, kind: TimerKind) -> None:
        self._timer_generation += 1
        ticket = self._timer_generation
        self._timer_ticket = ticket
        self._timer_kind = kind

        self.timers.arm(
            self.config.duration_for(kind),
            lambda: self.send(WidgetEvent(EventType.TIMER_EXPIRED, timer_kind=kind, ticket=ticket))
        )

    def _cancel_timer(self) -> None:
        self.timers.cancel()
        self._timer_ticket = None
        self._timer_kind = None

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                self.logger.exception("Snapshot listener raised", state=snapshot.state.value)
