from typing import MutableMapping, Union

from bson.raw_bson import RawBSONDocument
from twisted.python.failure import Failure

Document = Union[MutableMapping, RawBSONDocument]

# What the classifier accepts: an error value, or a Failure wrapping one.
ErrorLike = Union[BaseException, Failure]
