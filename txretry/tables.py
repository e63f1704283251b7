# coding: utf-8
# Copyright 2009-2014 The txmongo authors.  All rights reserved.
# Use of this source code is governed by the Apache License that can be
# found in the LICENSE file.

"""Classification tables.

Built once when the module is first imported and never modified afterwards.
"""

from txretry.error_codes import NON_RESUMABLE_CHANGE_STREAM_ERROR, ErrorCode
from txretry.errors import ErrorKind

# Failures observed by the driver that make reads and writes retryable.
_RETRYABLE_KINDS = frozenset(
    [
        ErrorKind.CONNECTION_FAILURE,
        ErrorKind.NOT_PRIMARY,
        ErrorKind.NODE_RECOVERING,
    ]
)

# A change stream can also be resumed after its cursor has disappeared.
RESUMABLE_CHANGE_STREAM_KINDS = _RETRYABLE_KINDS | frozenset(
    [
        ErrorKind.CURSOR_NOT_FOUND,
    ]
)
RETRYABLE_READ_KINDS = _RETRYABLE_KINDS
RETRYABLE_WRITE_KINDS = _RETRYABLE_KINDS

# Network errors reported by the server, e.g. by mongos talking to a shard.
_NETWORK_ERROR_CODES = frozenset(
    [
        ErrorCode.HostNotFound,
        ErrorCode.HostUnreachable,
        ErrorCode.NetworkTimeout,
        ErrorCode.SocketException,
    ]
)

RETRYABLE_READ_CODES = _NETWORK_ERROR_CODES
RETRYABLE_WRITE_CODES = _NETWORK_ERROR_CODES | frozenset(
    [
        ErrorCode.ExceededTimeLimit,
    ]
)

# Any command error is resumable unless it has one of these codes or labels.
NON_RESUMABLE_CHANGE_STREAM_CODES = frozenset(
    [
        ErrorCode.CappedPositionLost,
        ErrorCode.CursorKilled,
        ErrorCode.Interrupted,
    ]
)
NON_RESUMABLE_CHANGE_STREAM_LABELS = frozenset(
    [
        NON_RESUMABLE_CHANGE_STREAM_ERROR,
    ]
)

# Codes found under ``writeConcernError.code``. Note that this includes the
# "not primary" and "shutting down" codes, unlike RETRYABLE_WRITE_CODES.
RETRYABLE_WRITE_CONCERN_CODES = RETRYABLE_WRITE_CODES | frozenset(
    [
        ErrorCode.InterruptedAtShutdown,
        ErrorCode.InterruptedDueToReplStateChange,
        ErrorCode.NotPrimary,
        ErrorCode.NotPrimaryNoSecondaryOk,
        ErrorCode.NotPrimaryOrSecondary,
        ErrorCode.PrimarySteppedDown,
        ErrorCode.ShutdownInProgress,
    ]
)
