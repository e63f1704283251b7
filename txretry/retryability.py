# coding: utf-8
# Copyright 2009-2014 The txmongo authors.  All rights reserved.
# Use of this source code is governed by the Apache License that can be
# found in the LICENSE file.

"""Decide whether a failed operation may be retried or resumed.

Typical use from a write path::

    try:
        result = await do_write()
    except (DriverError, PyMongoError) as exc:
        add_retryable_write_error_label_if_required(exc)
        if not is_retryable_write_error(exc):
            raise
        ...

pymongo exceptions are classified through
:func:`txretry.pymongo_internals.from_pymongo_error`. All functions here are
pure lookups against the tables in
:mod:`txretry.tables`, except for
:func:`add_retryable_write_error_label_if_required` which may add a label to
the error it is given.
"""

from __future__ import annotations

import logging

from pymongo.errors import PyMongoError
from twisted.python import log
from twisted.python.failure import Failure

from txretry import tables
from txretry.error_codes import RETRYABLE_WRITE_ERROR
from txretry.errors import DriverError, ErrorShape
from txretry.pymongo_internals import from_pymongo_error
from txretry.types import ErrorLike

__all__ = [
    "add_retryable_write_error_label_if_required",
    "is_resumable_change_stream_error",
    "is_retryable_read_error",
    "is_retryable_write_error",
    "should_label_as_retryable_write",
    "unwrap_failure",
]


def unwrap_failure(err: ErrorLike) -> BaseException:
    if isinstance(err, Failure):
        return err.value
    return err


def _shape(err: BaseException):
    # Foreign exceptions and plain DriverError values have no shape.
    return getattr(err, "shape", None)


def _classify(err: ErrorLike) -> BaseException:
    err = unwrap_failure(err)
    if isinstance(err, PyMongoError):
        return from_pymongo_error(err)
    return err


def is_resumable_change_stream_error(err: ErrorLike) -> bool:
    """True if a change stream may be resumed after `err`.

    Command errors are resumable unless excluded by code or by label, the
    label taking precedence. Local errors are resumable by kind.
    """
    err = _classify(err)
    shape = _shape(err)

    if shape is ErrorShape.COMMAND:
        is_non_resumable = err.code in tables.NON_RESUMABLE_CHANGE_STREAM_CODES or any(
            err.has_error_label(label)
            for label in tables.NON_RESUMABLE_CHANGE_STREAM_LABELS
        )
        return not is_non_resumable
    elif shape is ErrorShape.LOCAL:
        return err.kind in tables.RESUMABLE_CHANGE_STREAM_KINDS
    return False


def is_retryable_read_error(err: ErrorLike) -> bool:
    """True if the read that failed with `err` may be retried."""
    err = _classify(err)
    shape = _shape(err)

    if shape is ErrorShape.LOCAL:
        return err.kind in tables.RETRYABLE_READ_KINDS
    elif shape is ErrorShape.COMMAND:
        return err.code in tables.RETRYABLE_READ_CODES
    return False


def should_label_as_retryable_write(err: ErrorLike) -> bool:
    err = _classify(err)
    shape = _shape(err)

    if shape is ErrorShape.LOCAL:
        return err.kind in tables.RETRYABLE_WRITE_KINDS
    elif shape is ErrorShape.COMMAND:
        return err.code in tables.RETRYABLE_WRITE_CODES
    elif shape is ErrorShape.WRITE_CONCERN:
        code = err.nested_code
        return code is not None and code in tables.RETRYABLE_WRITE_CONCERN_CODES
    return False


def add_retryable_write_error_label_if_required(err: ErrorLike) -> None:
    """Attach the ``RetryableWriteError`` label if the write may be retried.

    Must be called right after a write fails and before
    :func:`is_retryable_write_error` is consulted. Calling it more than once is
    harmless. The caller must own `err` exclusively while this runs. pymongo
    exceptions are labeled in place too.
    """
    err = unwrap_failure(err)
    if not should_label_as_retryable_write(err):
        return
    if err.has_error_label(RETRYABLE_WRITE_ERROR):
        return

    if isinstance(err, PyMongoError):
        err._add_error_label(RETRYABLE_WRITE_ERROR)
    else:
        err.add_error_label(RETRYABLE_WRITE_ERROR)
    log.msg(
        f"TxRetry: labeled {err!r} as {RETRYABLE_WRITE_ERROR}",
        logLevel=logging.DEBUG,
    )


def is_retryable_write_error(err: ErrorLike) -> bool:
    """True if `err` carries the ``RetryableWriteError`` label.

    Only the label is consulted, whoever attached it: the server or
    :func:`add_retryable_write_error_label_if_required`.
    """
    err = unwrap_failure(err)
    if not isinstance(err, (DriverError, PyMongoError)):
        return False
    return err.has_error_label(RETRYABLE_WRITE_ERROR)
