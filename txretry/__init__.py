# coding: utf-8
# Copyright 2009-2014 The txmongo authors.  All rights reserved.
# Use of this source code is governed by the Apache License that can be
# found in the LICENSE file.

from txretry.error_codes import ErrorCode, RETRYABLE_WRITE_ERROR, \
    NON_RESUMABLE_CHANGE_STREAM_ERROR
from txretry.errors import CommandError, DriverError, ErrorKind, ErrorShape, \
    LocalError, WriteConcernError
from txretry.retryability import add_retryable_write_error_label_if_required, \
    is_resumable_change_stream_error, is_retryable_read_error, \
    is_retryable_write_error, should_label_as_retryable_write


assert ErrorCode
assert RETRYABLE_WRITE_ERROR
assert NON_RESUMABLE_CHANGE_STREAM_ERROR
assert CommandError
assert DriverError
assert ErrorKind
assert ErrorShape
assert LocalError
assert WriteConcernError
assert add_retryable_write_error_label_if_required
assert is_resumable_change_stream_error
assert is_retryable_read_error
assert is_retryable_write_error
assert should_label_as_retryable_write
