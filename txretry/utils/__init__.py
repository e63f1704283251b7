from functools import wraps
from inspect import iscoroutine

from twisted.internet import defer
from twisted.python.failure import Failure

from txretry.pymongo_internals import get_err
from txretry.retryability import (
    add_retryable_write_error_label_if_required,
    unwrap_failure,
)

__all__ = [
    "get_err",
    "label_retryable_write_failure",
    "labels_retryable_writes",
    "unwrap_failure",
]


def label_retryable_write_failure(failure: Failure) -> Failure:
    """Errback labeling the failed write, then passing the failure on."""
    add_retryable_write_error_label_if_required(failure)
    return failure


def labels_retryable_writes(func):
    """Decorator for write operations.

    The decorated function may return a Deferred, a coroutine or a plain
    value; it always returns a Deferred. Whatever error the write fails with
    has the ``RetryableWriteError`` label attached when it qualifies.
    """

    @wraps(func)
    def _labeled(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
        except Exception:
            result = defer.fail()

        if iscoroutine(result):
            result = defer.ensureDeferred(result)
        elif not isinstance(result, defer.Deferred):
            result = defer.succeed(result)

        return result.addErrback(label_retryable_write_failure)

    return _labeled
