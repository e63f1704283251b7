# coding: utf-8
# Copyright 2009-2014 The txmongo authors.  All rights reserved.
# Use of this source code is governed by the Apache License that can be
# found in the LICENSE file.

from pymongo.errors import AutoReconnect, DuplicateKeyError, OperationFailure
from twisted.internet import defer
from twisted.python.failure import Failure
from twisted.trial import unittest

from txretry.error_codes import RETRYABLE_WRITE_ERROR, ErrorCode
from txretry.errors import CommandError, ErrorKind, LocalError
from txretry.retryability import is_retryable_write_error
from txretry.utils import (
    get_err,
    label_retryable_write_failure,
    labels_retryable_writes,
    unwrap_failure,
)


class TestLabelRetryableWriteFailure(unittest.TestCase):

    def test_FailureIsPassedOn(self):
        err = LocalError(ErrorKind.NOT_PRIMARY)
        failure = Failure(err)
        self.assertIs(label_retryable_write_failure(failure), failure)
        self.assertTrue(err.has_error_label(RETRYABLE_WRITE_ERROR))

    @defer.inlineCallbacks
    def test_Errback(self):
        err = CommandError(ErrorCode.NetworkTimeout)
        d = defer.fail(err).addErrback(label_retryable_write_failure)
        exc = yield self.assertFailure(d, CommandError)
        self.assertIs(exc, err)
        self.assertTrue(is_retryable_write_error(exc))


class TestLabelsRetryableWrites(unittest.TestCase):

    @defer.inlineCallbacks
    def test_DeferredFailure(self):
        @labels_retryable_writes
        def insert():
            return defer.fail(LocalError(ErrorKind.CONNECTION_FAILURE))

        exc = yield self.assertFailure(insert(), LocalError)
        self.assertTrue(is_retryable_write_error(exc))

    @defer.inlineCallbacks
    def test_CoroutineFailure(self):
        @labels_retryable_writes
        async def insert():
            raise CommandError(ErrorCode.ExceededTimeLimit)

        exc = yield self.assertFailure(insert(), CommandError)
        self.assertTrue(is_retryable_write_error(exc))

    @defer.inlineCallbacks
    def test_SynchronousFailure(self):
        @labels_retryable_writes
        def insert():
            raise LocalError(ErrorKind.NODE_RECOVERING)

        exc = yield self.assertFailure(insert(), LocalError)
        self.assertTrue(is_retryable_write_error(exc))

    @defer.inlineCallbacks
    def test_NonRetryableFailure(self):
        @labels_retryable_writes
        def insert():
            return defer.fail(CommandError(ErrorCode.DuplicateKey))

        exc = yield self.assertFailure(insert(), CommandError)
        self.assertFalse(is_retryable_write_error(exc))

    @defer.inlineCallbacks
    def test_PymongoConnectionFailure(self):
        @labels_retryable_writes
        def insert():
            return defer.fail(AutoReconnect("connection closed"))

        exc = yield self.assertFailure(insert(), AutoReconnect)
        self.assertTrue(exc.has_error_label(RETRYABLE_WRITE_ERROR))
        self.assertTrue(is_retryable_write_error(exc))

    @defer.inlineCallbacks
    def test_PymongoOperationFailure(self):
        @labels_retryable_writes
        async def insert():
            raise OperationFailure("host not found", 7, {"ok": 0, "code": 7})

        exc = yield self.assertFailure(insert(), OperationFailure)
        self.assertTrue(exc.has_error_label(RETRYABLE_WRITE_ERROR))
        self.assertTrue(is_retryable_write_error(exc))

    @defer.inlineCallbacks
    def test_PymongoNonRetryableFailure(self):
        @labels_retryable_writes
        def insert():
            raise DuplicateKeyError("dup", 11000, {"ok": 0, "code": 11000})

        exc = yield self.assertFailure(insert(), DuplicateKeyError)
        self.assertFalse(exc.has_error_label(RETRYABLE_WRITE_ERROR))
        self.assertFalse(is_retryable_write_error(exc))

    @defer.inlineCallbacks
    def test_Success(self):
        @labels_retryable_writes
        def insert(doc, upsert=False):
            return defer.succeed((doc, upsert))

        @labels_retryable_writes
        async def update():
            return "updated"

        @labels_retryable_writes
        def delete():
            return 3

        result = yield insert({"x": 1}, upsert=True)
        self.assertEqual(result, ({"x": 1}, True))
        self.assertEqual((yield update()), "updated")
        self.assertEqual((yield delete()), 3)

    def test_KeepsName(self):
        @labels_retryable_writes
        def insert_one():
            pass

        self.assertEqual(insert_one.__name__, "insert_one")


class TestHelpers(unittest.TestCase):

    def test_UnwrapFailure(self):
        err = ValueError("x")
        self.assertIs(unwrap_failure(Failure(err)), err)
        self.assertIs(unwrap_failure(err), err)

    def test_GetErr(self):
        self.assertEqual(get_err({"codeName": "HostNotFound", "errmsg": "no host"}),
                         "HostNotFound: no host")
        self.assertEqual(get_err({"err": "E"}), "E")
        self.assertEqual(get_err({}, "default"), "default")
