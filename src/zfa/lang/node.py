from abc import abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

import attr
from typing_extensions import Unpack

from zfa.lang.interfaces import IMeasured
from zfa.lang.obj import PrintSettings, ZFAObject, lrepr
from zfa.lang.obj import seq_lrepr as _seq_lrepr

A = TypeVar("A")


class Node(ZFAObject, IMeasured, Generic[A]):
    """Base type of every ZFA list value.

    A Node is either an :py:class:`Atom` holding a single leaf value or a proper
    :py:class:`NodeList` (``Nil`` or ``Cons``) collecting other Nodes. Nodes are
    immutable once constructed."""

    __slots__ = ()

    @property
    @abstractmethod
    def is_atom(self) -> bool:
        raise NotImplementedError()

    @property
    def is_list(self) -> bool:
        return not self.is_atom


@attr.frozen(repr=False)
class Atom(Node[A]):
    value: A

    def _lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return lrepr(self.value, **kwargs)

    @property
    def is_atom(self) -> bool:
        return True

    @property
    def size(self) -> int:
        return 1


class NodeList(Node[A]):
    """Proper ZFA lists.

    Iterating over a NodeList yields its direct children from the most recently
    prepended element onwards. Equality and hashing on NodeLists are positional:
    two lists compare equal when they hold equal children in the same order.
    Order- and duplicate-insensitive comparison is provided by
    :py:func:`zfa.lang.relation.equivalent`."""

    __slots__ = ()

    def __bool__(self):
        return True

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, NodeList):
            return NotImplemented
        if len(self) != len(other) or self.size != other.size:
            return False
        return all(e1 == e2 for e1, e2 in zip(self, other))

    def __hash__(self):
        return hash(tuple(self))

    def __iter__(self) -> Iterator[Node[A]]:
        o: NodeList[A] = self
        while isinstance(o, Cons):
            yield o.head
            o = o.tail

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError()

    def _lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return _seq_lrepr(self, "{", "}", **kwargs)

    @property
    def is_atom(self) -> bool:
        return False

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError()

    def cons(self, *elems: Node[A]) -> "NodeList[A]":
        l: NodeList[A] = self
        for elem in elems:
            l = Cons(elem, l)
        return l


class Nil(NodeList[A]):
    """The empty proper list. Use the shared :py:data:`EMPTY` instance (or
    :py:func:`nil`) rather than creating new instances."""

    __slots__ = ()

    def __len__(self) -> int:
        return 0

    # Every empty list is the same list.
    def __reduce__(self):
        return nil, ()

    @property
    def is_empty(self) -> bool:
        return True

    @property
    def size(self) -> int:
        return 1


EMPTY: Nil = Nil()


@attr.frozen(eq=False, repr=False)
class Cons(NodeList[A]):
    head: Node[A] = attr.field(validator=attr.validators.instance_of(Node))
    tail: NodeList[A] = attr.field(validator=attr.validators.instance_of(NodeList))
    _size: int = attr.field(init=False, default=0)
    _count: int = attr.field(init=False, default=0)

    def __attrs_post_init__(self) -> None:
        # Validators have already run, so both children are well-formed Nodes.
        object.__setattr__(self, "_size", 1 + self.head.size + self.tail.size)
        object.__setattr__(self, "_count", 1 + len(self.tail))

    def __len__(self) -> int:
        return self._count

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def size(self) -> int:
        return self._size


def atom(a: A) -> "Atom[A]":
    """Wrap the leaf value ``a`` as a Node."""
    return Atom(a)


def nil() -> Nil:
    """Return the empty proper list."""
    return EMPTY


def cons(x: Node[A], l: NodeList[A]) -> "Cons[A]":
    """Prepend the Node ``x`` onto the proper list ``l``."""
    return Cons(x, l)
