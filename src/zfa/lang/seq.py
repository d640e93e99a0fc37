import functools
from collections.abc import Iterable
from typing import Any, TypeVar

from pyrsistent import PVector, pvector

from zfa.lang.node import EMPTY, Atom, Node, NodeList

A = TypeVar("A")


def to_seq(l: NodeList[A]) -> "PVector[Node[A]]":
    """Return the direct children of the proper list ``l`` as an immutable vector,
    in the order they would be visited iterating over ``l``."""
    if not isinstance(l, NodeList):
        raise TypeError(f"Cannot produce a sequence from {type(l).__name__}")
    return pvector(l)


def of_seq(s: Iterable[Node[A]]) -> NodeList[A]:
    """Create a proper list whose children are the Nodes of ``s``, in order.

    This is the inverse of :py:func:`to_seq`."""
    return EMPTY.cons(*reversed(tuple(s)))


@functools.singledispatch
def from_python(o: Any) -> Node:
    """Coerce the argument o to a Node.

    Nodes are returned unchanged. Python lists, tuples, sets, and frozensets
    become proper lists of their (coerced) elements. Every other value becomes
    an Atom."""
    return Atom(o)


@from_python.register(Node)
def _from_python_node(o: Node) -> Node:
    return o


@from_python.register(list)
@from_python.register(tuple)
@from_python.register(set)
@from_python.register(frozenset)
def _from_python_coll(o: Iterable) -> NodeList:
    return of_seq(map(from_python, o))


def l(*members) -> NodeList:  # noqa
    """Creates a new proper list from members, coercing each with
    :py:func:`from_python`."""
    return of_seq(map(from_python, members))
