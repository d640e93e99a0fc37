from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class IExceptionInfo(Exception, ABC):
    """``IExceptionInfo`` types are exception types which contain a mapping of
    contextual information about the raised exception."""

    __slots__ = ()

    @property
    @abstractmethod
    def data(self) -> Mapping[str, Any]:
        raise NotImplementedError()


class IMeasured(ABC):
    """``IMeasured`` types report the number of constructors used to build them.

    The measure is fixed when the value is constructed, so reading it is a
    constant time operation."""

    __slots__ = ()

    @property
    @abstractmethod
    def size(self) -> int:
        raise NotImplementedError()
