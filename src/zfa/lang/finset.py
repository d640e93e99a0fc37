from collections.abc import Hashable, Iterator
from itertools import chain
from typing import Any, Generic, Optional, TypeVar

import attr
from pyrsistent import PVector, pvector
from typing_extensions import Unpack

from zfa.lang.node import EMPTY, Atom, Node, NodeList
from zfa.lang.obj import PrintSettings, ZFAObject, lrepr
from zfa.lang.obj import seq_lrepr as _seq_lrepr
from zfa.lang.relation import DecisionLimits, equivalent, member, subset
from zfa.lang.seq import from_python, of_seq

A = TypeVar("A")

_ATOM_KEY = "atom"


def canonical_key(node: Node) -> Hashable:
    """Return a hashable key for ``node`` which is equal for equivalent Nodes.

    Atoms map to a pair of a tag and their value; proper lists map to the
    frozenset of their children's keys. Atom values must be hashable."""
    keys: dict[int, Hashable] = {}
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        n, children_done = stack.pop()
        if id(n) in keys:
            continue
        if isinstance(n, Atom):
            keys[id(n)] = (_ATOM_KEY, n.value)
        elif children_done:
            keys[id(n)] = frozenset(keys[id(child)] for child in n)
        else:
            stack.append((n, True))
            stack.extend((child, False) for child in n)
    return keys[id(node)]


@attr.frozen(eq=False, repr=False)
class Finset(ZFAObject, Generic[A]):
    """A ZFA list value considered up to equivalence.

    Two Finsets are equal whenever their underlying Nodes are equivalent, no
    matter how those Nodes order or repeat their elements. Finsets are immutable;
    operations return new Finsets.

    Do not instantiate directly. Instead use :py:meth:`Finset.of`, the
    :py:func:`finset` factory, or :py:meth:`Finset.empty`."""

    _node: Node[A] = attr.field(validator=attr.validators.instance_of(Node))
    _hash: Optional[int] = attr.field(init=False, default=None)

    @classmethod
    def of(cls, node: Node[A]) -> "Finset[A]":
        return cls(node)

    @staticmethod
    def empty() -> "Finset":
        return EMPTY_FINSET

    def __reduce__(self):
        return Finset, (self._node,)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Finset):
            return NotImplemented
        return equivalent(self._node, other._node)

    def __hash__(self):
        if self._hash is None:
            object.__setattr__(self, "_hash", hash(canonical_key(self._node)))
        return self._hash

    def __bool__(self):
        return True

    def __contains__(self, item):
        return member(_coerce(item), self._list("test membership in"))

    def __iter__(self) -> Iterator["Finset[A]"]:
        return iter(self.elements())

    def __len__(self):
        return len(self.elements())

    def __le__(self, other):
        if not isinstance(other, Finset):
            return NotImplemented
        return self.issubset(other)

    def __or__(self, other):
        if not isinstance(other, Finset):
            return NotImplemented
        return self.union(other)

    def _lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return self._members_lrepr("#finset{", **kwargs)

    def _members_lrepr(self, start: str, **kwargs: Unpack[PrintSettings]) -> str:
        if isinstance(self._node, Atom):
            return lrepr(self._node, **kwargs)
        return _seq_lrepr(map(_Member, self.elements()), start, "}", **kwargs)

    def _list(self, action: str) -> NodeList[A]:
        if not isinstance(self._node, NodeList):
            raise TypeError(f"Cannot {action} an atom")
        return self._node

    @property
    def is_atom(self) -> bool:
        return isinstance(self._node, Atom)

    @property
    def is_empty(self) -> bool:
        return isinstance(self._node, NodeList) and self._node.is_empty

    def issubset(self, other: "Finset[A]") -> bool:
        action = "compare subsets of"
        return subset(self._list(action), other._list(action))

    def insert(self, elem: Any) -> "Finset[A]":
        return Finset(self._list("insert into").cons(_coerce(elem)))

    def union(self, other: "Finset[A]") -> "Finset[A]":
        action = "take the union of"
        return Finset(of_seq(chain(self._list(action), other._list(action))))

    def elements(self) -> "PVector[Finset[A]]":
        """Return one Finset for each distinct member, in the order they first
        appear in the underlying list."""
        limits = DecisionLimits.from_env()
        distinct: list[Node[A]] = []
        for child in self._list("list the elements of"):
            if not any(equivalent(child, seen, limits) for seen in distinct):
                distinct.append(child)
        return pvector(Finset(n) for n in distinct)


@attr.frozen(repr=False)
class _Member(ZFAObject):
    """A member of a printed Finset, shown in plain braces with its own members
    deduplicated."""

    finset: Finset

    def _lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return self.finset._members_lrepr("{", **kwargs)


def _coerce(o: Any) -> Node:
    if isinstance(o, Finset):
        return o._node
    return from_python(o)


EMPTY_FINSET: Finset = Finset(EMPTY)


def canonical_empty() -> Finset:
    """Return the Finset of the empty list."""
    return EMPTY_FINSET


def finset(o: Any) -> Finset:
    """Creates a new Finset from a Node or a Python value coerced with
    :py:func:`zfa.lang.seq.from_python`."""
    return Finset(_coerce(o))


def equals(a: Finset, b: Finset) -> bool:
    """Return True if ``a`` and ``b`` hold equivalent Nodes."""
    return a == b
