# coding: utf-8
# Copyright 2009-2014 The txmongo authors.  All rights reserved.
# Use of this source code is governed by the Apache License that can be
# found in the LICENSE file.

"""Error values consumed by the retryability classifier.

Every error value is one of three shapes:

* :class:`LocalError` -- a failure observed by the driver itself (dropped
  connection, not-primary reply, ...), identified by its :class:`ErrorKind`;
* :class:`CommandError` -- a failed command, identified by the server code;
* :class:`WriteConcernError` -- a write whose durability requirement was not
  met, carrying the server response with a nested ``writeConcernError``.

The shape is exposed as ``error.shape`` and is what the classifier switches
on. All shapes own a set of error labels which only ever grows.
"""

from __future__ import annotations

import collections.abc
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Set

from txretry.types import Document

__all__ = [
    "ErrorKind",
    "ErrorShape",
    "DriverError",
    "LocalError",
    "CommandError",
    "WriteConcernError",
]


class ErrorKind(Enum):
    CONNECTION_FAILURE = 1
    NOT_PRIMARY = 2
    NODE_RECOVERING = 3
    CURSOR_NOT_FOUND = 4


class ErrorShape(Enum):
    LOCAL = 1
    COMMAND = 2
    WRITE_CONCERN = 3


class DriverError(Exception):
    """Base class of all classifiable errors.

    :param message: human readable description of the failure.
    :param error_labels: labels already attached to the error, usually the
        ``errorLabels`` array of the server reply.
    """

    shape: Optional[ErrorShape] = None

    def __init__(self, message: str = "", error_labels: Iterable[str] = ()):
        super().__init__(message)
        self._message = message
        self._error_labels: Set[str] = set()
        for label in error_labels:
            self.add_error_label(label)

    @property
    def message(self) -> str:
        return self._message

    @property
    def error_labels(self) -> FrozenSet[str]:
        """Snapshot of the labels currently attached to this error."""
        return frozenset(self._error_labels)

    def has_error_label(self, label: str) -> bool:
        return label in self._error_labels

    def add_error_label(self, label: str) -> None:
        """Attach `label`. Adding a label that is already present is a no-op."""
        if not isinstance(label, str):
            raise TypeError(f"error label must be a str, not: {label!r}")
        self._error_labels.add(label)

    def __repr__(self):
        return f"{type(self).__name__}({self._message!r}, labels={sorted(self._error_labels)!r})"


class LocalError(DriverError):
    shape = ErrorShape.LOCAL

    def __init__(
        self, kind: ErrorKind, message: str = "", error_labels: Iterable[str] = ()
    ):
        if not isinstance(kind, ErrorKind):
            raise TypeError(
                f"kind must be an instance of txretry.errors.ErrorKind, not: {kind!r}"
            )
        super().__init__(message or kind.name, error_labels)
        self._kind = kind

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    def __repr__(self):
        return f"LocalError({self._kind.name}, labels={sorted(self._error_labels)!r})"


class CommandError(DriverError):
    shape = ErrorShape.COMMAND

    def __init__(
        self,
        code: Optional[int],
        message: str = "",
        details: Optional[Document] = None,
        error_labels: Iterable[str] = (),
    ):
        if code is not None and not isinstance(code, int):
            raise TypeError(f"code must be an integer or None, not: {code!r}")
        super().__init__(message, error_labels)
        self._code = code
        self._details = details

    @property
    def code(self) -> Optional[int]:
        """The server error code, or None if the server did not report one."""
        return self._code

    @property
    def details(self) -> Optional[Document]:
        return self._details

    def __repr__(self):
        return f"CommandError(code={self._code!r}, labels={sorted(self._error_labels)!r})"


class WriteConcernError(DriverError):
    shape = ErrorShape.WRITE_CONCERN

    def __init__(
        self, response: Document, message: str = "", error_labels: Iterable[str] = ()
    ):
        if not isinstance(response, collections.abc.Mapping):
            raise TypeError(f"response must be a mapping, not: {response!r}")
        super().__init__(message, error_labels)
        self._response = response

    @property
    def response(self) -> Document:
        return self._response

    @property
    def nested_code(self) -> Optional[int]:
        """``writeConcernError.code`` of the response, or None if it is missing."""
        wc_error = self._response.get("writeConcernError")
        if not isinstance(wc_error, collections.abc.Mapping):
            return None
        return wc_error.get("code")

    def __repr__(self):
        return f"WriteConcernError(code={self.nested_code!r}, labels={sorted(self._error_labels)!r})"
