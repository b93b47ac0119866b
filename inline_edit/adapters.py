"""
Host collaborator adapters.

Validator wraps the host draft predicate; CommitAdapter wraps the host
persistence callback. Both shield the controller from host exceptions.
"""

from typing import Any, Callable, Optional

import structlog

from .errors import CommitFailedError

logger = structlog.get_logger(__name__)


class Validator:
    """Synchronous draft predicate; always true when no predicate is given."""

    def __init__(self, predicate: Optional[Callable[[Any], bool]] = None):
        self.predicate = predicate
        self.call_count = 0

    @property
    def configured(self) -> bool:
        return self.predicate is not None

    def __call__(self, draft: Any) -> bool:
        if self.predicate is None:
            return True

        self.call_count += 1
        try:
            return bool(self.predicate(draft))
        except Exception:
            # A predicate that cannot decide rejects the draft
            logger.exception("Validator raised, treating draft as invalid", draft=draft, call_count=self.call_count)
            return False


class CommitAdapter:
    """
    Fire-and-forget wrapper around the host commit callback.

    Invocation means "commit attempted", never "commit succeeded". The return
    value is ignored; success is learned later through ACK or a timeout.
    """

    def __init__(self, callback: Optional[Callable[[Any], Any]] = None):
        self.callback = callback
        self.attempt_count = 0
        self.failure_count = 0

    def attempt(self, draft: Any) -> None:
        """
        Invoke the callback once with the draft.

        Raises:
            CommitFailedError: If the host callback raised
        """
        self.attempt_count += 1
        if self.callback is None:
            return

        try:
            self.callback(draft)
        except Exception as e:
            self.failure_count += 1
            raise CommitFailedError(
                f"Commit callback raised {type(e).__name__}: {e}",
                value=draft,
                cause=e,
                context={"attempt": self.attempt_count}
            ) from e
