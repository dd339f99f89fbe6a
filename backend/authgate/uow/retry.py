"""Retry policy for transactions: the ambient retry context and error classification.

A serializable store may abort a transaction under contention with a
*retryable* SQLSTATE. Only two codes qualify:

``40001``
    Standard ``serialization_failure``.
``CR000``
    Legacy CockroachDB restart code, still emitted by older clusters.

Everything else, including errors with no SQLSTATE at all, is final.
"""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace

from authgate.uow.errors import StatementCancelledError

DEFAULT_MAX_RETRIES = 50
RETRYABLE_SQLSTATES = frozenset({"40001", "CR000"})


@dataclass(frozen=True, slots=True)
class RetryContext:
    """
    Bounds for one logical transaction.

    :param max_retries: Retries allowed after the first attempt; ``0`` means
        unbounded.
    :param deadline: ``time.monotonic()`` instant after which no new attempt
        starts, or ``None``.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    deadline: float | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

    @property
    def unbounded(self) -> bool:
        return self.max_retries == 0

    def exhausted(self, retries: int) -> bool:
        """``True`` once ``retries`` restarts exceed the budget."""
        return not self.unbounded and retries > self.max_retries

    def raise_if_expired(self) -> None:
        """Raise :class:`StatementCancelledError` when the deadline has passed."""
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise StatementCancelledError("deadline exceeded before transaction attempt")


_current: ContextVar[RetryContext | None] = ContextVar("authgate_retry_context", default=None)


def current_retry_context(default: RetryContext | None = None) -> RetryContext:
    """Return the ambient context set by :func:`retry_context`, else ``default``."""
    return _current.get() or default or RetryContext()


@contextmanager
def retry_context(
    *,
    max_retries: int | None = None,
    timeout: float | None = None,
) -> Iterator[RetryContext]:
    """
    Override retry bounds for every transaction run inside the block.

    Unspecified values are inherited from the enclosing context.

    Examples
    --------
    >>> with retry_context(max_retries=3, timeout=2.0):
    ...     store.add_revoked_token(token)
    """
    base = current_retry_context()
    ctx = replace(
        base,
        max_retries=base.max_retries if max_retries is None else max_retries,
        deadline=base.deadline if timeout is None else time.monotonic() + timeout,
    )
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


def sqlstate_of(exc: BaseException) -> str | None:
    """
    Find the first SQLSTATE along the explicit wrapping chain of ``exc``.

    The chain is the DBAPI ``orig`` that SQLAlchemy attaches plus
    ``__cause__`` (``raise ... from ...``). Implicit ``__context__`` is not
    followed: an error raised while *handling* a conflict is a new error.
    psycopg 3 exposes ``sqlstate`` (and ``diag.sqlstate``), psycopg2
    ``pgcode``.
    """
    seen: set[int] = set()
    queue: deque[BaseException] = deque([exc])
    while queue:
        current = queue.popleft()
        if id(current) in seen:
            continue
        seen.add(id(current))

        for code in (
            getattr(current, "sqlstate", None),
            getattr(current, "pgcode", None),
            getattr(getattr(current, "diag", None), "sqlstate", None),
        ):
            if isinstance(code, str) and code:
                return code

        for nxt in (getattr(current, "orig", None), current.__cause__):
            if isinstance(nxt, BaseException):
                queue.append(nxt)
    return None


def is_retryable(exc: BaseException) -> bool:
    """Return ``True`` when ``exc`` carries a retryable SQLSTATE."""
    return sqlstate_of(exc) in RETRYABLE_SQLSTATES
