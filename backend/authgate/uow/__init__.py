"""Unit of Work abstractions and the retrying transaction executor.

Stores never open transactions themselves: every read and write goes through
:class:`RetryableTransactionExecutor`, which runs it inside a savepoint on a
:class:`SQLAlchemyUnitOfWork` and retries serialization conflicts.
"""

from .base import TransactionHandle, UnitOfWork
from .errors import (
    AmbiguousCommitError,
    MaxRetriesExceededError,
    StatementCancelledError,
    TransactionError,
    TxnRestartError,
)
from .executor import RetryableTransactionExecutor, execute_in_tx
from .retry import RetryContext, current_retry_context, is_retryable, retry_context
from .sqlalchemy_uow import SQLAlchemyUnitOfWork

__all__ = [
    "AmbiguousCommitError",
    "MaxRetriesExceededError",
    "RetryContext",
    "RetryableTransactionExecutor",
    "SQLAlchemyUnitOfWork",
    "StatementCancelledError",
    "TransactionError",
    "TransactionHandle",
    "TxnRestartError",
    "UnitOfWork",
    "current_retry_context",
    "execute_in_tx",
    "is_retryable",
    "retry_context",
]
