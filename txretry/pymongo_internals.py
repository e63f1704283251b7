# coding: utf-8
# Copyright 2009-2014 The txmongo authors.  All rights reserved.
# Use of this source code is governed by the Apache License that can be
# found in the LICENSE file.

"""Turn pymongo exceptions and raw command replies into classifiable errors."""

from __future__ import annotations

import collections.abc
from typing import Optional

from pymongo.errors import (
    BulkWriteError,
    ConnectionFailure,
    CursorNotFound,
    NotPrimaryError,
    OperationFailure,
    PyMongoError,
    ServerSelectionTimeoutError,
)
from pymongo.errors import WriteConcernError as PyMongoWriteConcernError

from txretry.error_codes import ErrorCode
from txretry.errors import (
    CommandError,
    DriverError,
    ErrorKind,
    LocalError,
    WriteConcernError,
)
from txretry.types import Document

__all__ = [
    "error_from_response",
    "from_pymongo_error",
    "get_err",
]


# From the SDAM spec, the "node is shutting down" codes.
_SHUTDOWN_CODES = frozenset(
    [
        ErrorCode.InterruptedAtShutdown,
        ErrorCode.ShutdownInProgress,
    ]
)
# From the SDAM spec, the "node is recovering" codes (of which the "node is
# shutting down" codes are a subset).
_NODE_RECOVERING_CODES = (
    frozenset(
        [
            ErrorCode.InterruptedDueToReplStateChange,
            ErrorCode.NotPrimaryOrSecondary,
            ErrorCode.PrimarySteppedDown,
        ]
    )
    | _SHUTDOWN_CODES
)
# From the SDAM spec, the "not primary" codes.
_NOT_PRIMARY_CODES = frozenset(
    [
        ErrorCode.LegacyNotPrimary,
        ErrorCode.NotPrimary,
        ErrorCode.NotPrimaryNoSecondaryOk,
    ]
)


def get_err(document, default=None):
    err = document.get("err", None) or document.get("codeName", None)
    errmsg = document.get("errmsg", None)
    return ": ".join(filter(None, (err, errmsg))) or default


def _is_not_primary(code: Optional[int], errmsg: str) -> bool:
    return (
        code in _NOT_PRIMARY_CODES
        or code in _NODE_RECOVERING_CODES
        or "not master" in errmsg
        or "node is recovering" in errmsg
    )


def _not_primary_kind(code: Optional[int], errmsg: str) -> ErrorKind:
    # The code decides when there is one, the message text otherwise.
    if code in _NODE_RECOVERING_CODES:
        return ErrorKind.NODE_RECOVERING
    elif code in _NOT_PRIMARY_CODES:
        return ErrorKind.NOT_PRIMARY
    elif "node is recovering" in errmsg:
        return ErrorKind.NODE_RECOVERING
    return ErrorKind.NOT_PRIMARY


def from_pymongo_error(exc: BaseException) -> DriverError:
    """Convert a pymongo exception into the matching error value.

    Error labels of `exc` are carried over. Errors that are never retryable,
    like server selection timeouts, become a plain :class:`DriverError`.
    """
    if isinstance(exc, DriverError):
        return exc
    if not isinstance(exc, PyMongoError):
        raise TypeError(f"expected a pymongo error, not: {exc!r}")

    labels = getattr(exc, "_error_labels", ())
    message = str(exc)

    if isinstance(exc, NotPrimaryError):
        details = exc.details
        code = (
            details.get("code")
            if isinstance(details, collections.abc.Mapping)
            else None
        )
        return LocalError(_not_primary_kind(code, message), message, labels)
    elif isinstance(exc, ServerSelectionTimeoutError):
        return DriverError(message, labels)
    elif isinstance(exc, ConnectionFailure):
        return LocalError(ErrorKind.CONNECTION_FAILURE, message, labels)
    elif isinstance(exc, CursorNotFound):
        return LocalError(ErrorKind.CURSOR_NOT_FOUND, message, labels)
    elif isinstance(exc, PyMongoWriteConcernError):
        return WriteConcernError(
            {"writeConcernError": exc.details or {}}, message, labels
        )
    elif isinstance(exc, BulkWriteError):
        # Report the last write concern error, if any, like a single write would.
        wc_errors = (exc.details or {}).get("writeConcernErrors")
        if wc_errors:
            return WriteConcernError(
                {"writeConcernError": wc_errors[-1]}, message, labels
            )
        return CommandError(exc.code, message, exc.details, labels)
    elif isinstance(exc, OperationFailure):
        return CommandError(exc.code, message, exc.details, labels)
    return DriverError(message, labels)


def error_from_response(response: Document) -> Optional[DriverError]:
    """Build the error value described by a decoded command reply.

    Returns None if the reply reports neither a command failure nor a write
    concern failure.
    """
    if not isinstance(response, collections.abc.Mapping):
        raise TypeError(f"response must be a mapping, not: {response!r}")

    labels = response.get("errorLabels") or ()

    if "ok" not in response:
        # Server didn't recognize our message as a command.
        return CommandError(
            response.get("code"),
            response.get("$err") or "Unknown error",
            response,
            labels,
        )

    if not response["ok"]:
        details = response
        # Mongos returns the error details in a 'raw' object
        # for some errors.
        if "raw" in response:
            for shard in response["raw"].values():
                # Grab the first non-empty raw error from a shard.
                if shard.get("errmsg") and not shard.get("ok"):
                    details = shard
                    break

        code = details.get("code")
        errmsg = get_err(details, "Unknown error")

        # Server is "not primary" or "recovering"
        if _is_not_primary(code, errmsg):
            return LocalError(_not_primary_kind(code, errmsg), errmsg, labels)
        elif code == ErrorCode.CursorNotFound:
            return LocalError(ErrorKind.CURSOR_NOT_FOUND, errmsg, labels)

        return CommandError(code, errmsg, response, labels)

    wc_error = response.get("writeConcernError")
    if wc_error:
        return WriteConcernError(
            response, get_err(wc_error, "Write concern error"), labels
        )
    return None
