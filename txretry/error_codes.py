# coding: utf-8
# Copyright 2009-2014 The txmongo authors.  All rights reserved.
# Use of this source code is governed by the Apache License that can be
# found in the LICENSE file.

"""Server error codes and error labels the retryability rules depend on."""

from enum import IntEnum

__all__ = [
    "ErrorCode",
    "RETRYABLE_WRITE_ERROR",
    "NON_RESUMABLE_CHANGE_STREAM_ERROR",
]


class ErrorCode(IntEnum):
    HostUnreachable = 6
    HostNotFound = 7
    Interrupted = 11
    CursorNotFound = 43
    MaxTimeMSExpired = 50
    WriteConcernFailed = 64
    NetworkTimeout = 89
    ShutdownInProgress = 91
    CappedPositionLost = 136
    PrimarySteppedDown = 189
    CursorKilled = 237
    ExceededTimeLimit = 262
    SocketException = 9001
    LegacyNotPrimary = 10058
    NotPrimary = 10107  # NotWritablePrimary, formerly NotMaster
    DuplicateKey = 11000
    InterruptedAtShutdown = 11600
    InterruptedDueToReplStateChange = 11602
    NotPrimaryNoSecondaryOk = 13435
    NotPrimaryOrSecondary = 13436


# Both strings are part of the server wire contract and must not change.
RETRYABLE_WRITE_ERROR = "RetryableWriteError"
NON_RESUMABLE_CHANGE_STREAM_ERROR = "NonResumableChangeStreamError"
