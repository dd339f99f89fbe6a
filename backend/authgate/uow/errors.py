"""Terminal outcomes of a retried transaction other than success."""

from __future__ import annotations


class TransactionError(Exception):
    """Base for failures produced by the transaction executor itself.

    ``code`` is a stable identifier surfaced in API problem documents.
    """

    code = "transaction_error"


class AmbiguousCommitError(TransactionError):
    """Releasing the savepoint failed with a non-retryable error.

    The work may or may not have been applied; retrying could apply it twice.

    :param cause: Error raised by the release.
    """

    code = "ambiguous_commit"

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"transaction outcome unknown: {cause}")
        self.cause = cause


class TxnRestartError(TransactionError):
    """Rolling back to the savepoint failed while handling a retryable error.

    :param rollback_error: Error raised by ``ROLLBACK TO SAVEPOINT``.
    :param cause: The retryable error that triggered the restart.
    """

    code = "transaction_restart_failed"

    def __init__(self, rollback_error: BaseException, cause: BaseException) -> None:
        super().__init__(
            f"restarting transaction failed: {rollback_error} (while handling: {cause})"
        )
        self.rollback_error = rollback_error
        self.cause = cause


class MaxRetriesExceededError(TransactionError):
    """The retry budget ran out; ``cause`` is the last retryable error.

    :param cause: Last retryable error observed.
    :param max_retries: Budget that was exceeded.
    """

    code = "max_retries_exceeded"

    def __init__(self, cause: BaseException, max_retries: int) -> None:
        super().__init__(f"retrying transaction failed {max_retries} times: {cause}")
        self.cause = cause
        self.max_retries = max_retries


class StatementCancelledError(TransactionError):
    """The caller's deadline passed before the next attempt could start."""

    code = "statement_cancelled"
