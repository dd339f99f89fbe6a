"""Retry-safe execution of a unit of work inside a savepoint.

Protocol, per logical transaction::

    SAVEPOINT
    loop:
        run work
        ok        -> RELEASE SAVEPOINT -> COMMIT (best effort)    [committed]
        release fails, retryable     -> restart
        release fails, otherwise     -> AmbiguousCommitError       [terminal]
        work fails, not retryable    -> re-raise                   [terminal]
        work fails, retryable        -> restart
    restart:
        ROLLBACK TO SAVEPOINT, failure -> TxnRestartError         [terminal]
        retries += 1, over budget      -> MaxRetriesExceededError  [terminal]

Retries are immediate, with no backoff. Every exit that is not a commit rolls
the whole transaction back, including ``KeyboardInterrupt`` and other
``BaseException`` faults, which are then re-raised untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from authgate.uow.base import TransactionHandle
from authgate.uow.errors import AmbiguousCommitError, MaxRetriesExceededError, TxnRestartError
from authgate.uow.retry import RetryContext, current_retry_context, is_retryable, sqlstate_of
from authgate.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

T = TypeVar("T")


def execute_in_tx(
    tx: TransactionHandle,
    fn: Callable[[], T],
    *,
    context: RetryContext | None = None,
) -> T:
    """
    Run ``fn`` inside a savepoint on ``tx``, retrying serialization conflicts.

    ``fn`` must be safe to run again from scratch: it may be invoked several
    times and must not depend on in-process state left by a failed attempt.

    :param tx: Transaction handle; owned by this call until it returns.
    :param fn: The unit of work.
    :param context: Retry bounds; defaults to the ambient
        :func:`~authgate.uow.retry.retry_context`.
    :returns: Whatever ``fn`` returned on the committed attempt.
    :raises AmbiguousCommitError: Release failed with a non-retryable error.
    :raises TxnRestartError: Rolling back to the savepoint failed.
    :raises MaxRetriesExceededError: Retry budget exhausted.
    :raises StatementCancelledError: Deadline passed between attempts.
    """
    ctx = context or current_retry_context()
    committed = False
    try:
        tx.begin_savepoint()
        retries = 0
        while True:
            ctx.raise_if_expired()
            try:
                result = fn()
            except Exception as exc:
                if not is_retryable(exc):
                    raise
                cause: Exception = exc
            else:
                try:
                    tx.release_savepoint()
                except Exception as exc:
                    if not is_retryable(exc):
                        log.warning("transaction release failed; outcome unknown")
                        raise AmbiguousCommitError(exc) from exc
                    cause = exc
                else:
                    committed = True
                    return result

            try:
                tx.rollback_to_savepoint()
            except Exception as rollback_exc:
                log.warning("rollback to savepoint failed; giving up on transaction")
                raise TxnRestartError(rollback_exc, cause) from rollback_exc

            retries += 1
            if ctx.exhausted(retries):
                log.warning(
                    "transaction retries exhausted",
                    extra={"attempt": retries, "max_retries": ctx.max_retries},
                )
                raise MaxRetriesExceededError(cause, ctx.max_retries) from cause
            log.debug(
                "retrying transaction after serialization conflict",
                extra={"attempt": retries, "sqlstate": sqlstate_of(cause)},
            )
    finally:
        if committed:
            _commit_quietly(tx)
        else:
            tx.rollback()


def _commit_quietly(tx: TransactionHandle) -> None:
    # The savepoint release already made the work durable.
    try:
        tx.commit()
    except Exception:
        log.warning("final commit after savepoint release failed", exc_info=True)


class RetryableTransactionExecutor:
    """
    Run units of work against a fresh :class:`SQLAlchemyUnitOfWork` with retries.

    :param uow_factory: Builds the unit of work for each :meth:`run`; it is
        resolved lazily so the Flask-scoped session of the current request is
        used.
    :param default_context: Bounds used when no ambient
        :func:`~authgate.uow.retry.retry_context` is active.

    Examples
    --------
    >>> executor = RetryableTransactionExecutor()
    >>> executor.run(lambda uow: uow.revoked_tokens.is_revoked(token))
    """

    def __init__(
        self,
        uow_factory: Callable[[], SQLAlchemyUnitOfWork] = SQLAlchemyUnitOfWork,
        *,
        default_context: RetryContext | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._default_context = default_context or RetryContext()

    def run(self, work: Callable[[SQLAlchemyUnitOfWork], T]) -> T:
        """Execute ``work(uow)`` as one logical, retried transaction."""
        uow = self._uow_factory()
        return execute_in_tx(
            uow,
            lambda: work(uow),
            context=current_retry_context(self._default_context),
        )
