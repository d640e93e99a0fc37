"""Equivalence, subset, and membership decisions for ZFA lists.

The three relations are mutually recursive: two proper lists are equivalent when
each is a subset of the other, a list is a subset of another when each of its
children is a member of the other, and a Node is a member of a list when it is
equivalent to one of the list's children.

Rather than three mutually recursive Python functions, every question is posed as
a :py:class:`Goal` (one of :py:class:`CompareNodes`, :py:class:`CompareSubset`, or
:py:class:`CompareMember`). Expanding a Goal either answers it outright or splits
it into a :py:class:`Branch` of two smaller Goals joined by logical AND or OR.
Each Goal carries a ``measure`` computed from the sizes of its arguments, and
every Branch produced by a Goal holds Goals of strictly smaller measure. The
decision loop in :py:func:`decide` evaluates Goals with an explicit stack, so
neither the length nor the nesting depth of the input is bounded by the Python
recursion limit."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

import attr
from pyrsistent import pmap

from zfa.lang.exception import StructuralLimitExceeded
from zfa.lang.node import Atom, Cons, Node, NodeList
from zfa.logconfig import TRACE
from zfa.util import getenv_int, timed

logger = logging.getLogger(__name__)

MAX_STEPS_ENV_VAR = "ZFA_MAX_STEPS"
MAX_DEPTH_ENV_VAR = "ZFA_MAX_DEPTH"


def _positive(_, attribute: attr.Attribute, value: Optional[int]) -> None:
    if value is not None and value < 1:
        raise ValueError(f"{attribute.name} must be a positive integer; got {value}")


_limit_validators = [
    attr.validators.optional(attr.validators.instance_of(int)),
    _positive,
]


@attr.frozen
class DecisionLimits:
    """Optional bounds on the work a single decision may perform.

    ``max_steps`` bounds the number of Goals expanded and ``max_depth`` bounds the
    number of pending Branches. ``None`` leaves the corresponding quantity
    unbounded. Decisions on well-formed Nodes always terminate, so these are only
    useful to fail fast on very large inputs."""

    max_steps: Optional[int] = attr.field(default=None, validator=_limit_validators)
    max_depth: Optional[int] = attr.field(default=None, validator=_limit_validators)

    @classmethod
    def from_env(cls) -> "DecisionLimits":
        """Read limits from the ``ZFA_MAX_STEPS`` and ``ZFA_MAX_DEPTH`` environment
        variables. Unset or empty variables leave that limit unbounded."""
        return cls(
            max_steps=getenv_int(MAX_STEPS_ENV_VAR),
            max_depth=getenv_int(MAX_DEPTH_ENV_VAR),
        )


UNBOUNDED = DecisionLimits()


class Junction(Enum):
    ALL = "all"
    ANY = "any"

    def settles(self, value: bool) -> bool:
        """Return True if one operand evaluating to ``value`` decides the whole
        junction without evaluating the other."""
        return value is (self is Junction.ANY)


class Goal(ABC):
    __slots__ = ()

    @property
    @abstractmethod
    def measure(self) -> int:
        """Return the well-founded measure of this Goal.

        The measure is twice the sum of the sizes of the Goal's Node arguments,
        plus one for :py:class:`CompareNodes`. The extra unit lets a comparison of
        two lists descend into a subset check over the very same lists."""
        raise NotImplementedError()

    @abstractmethod
    def expand(self) -> Union[bool, "Branch"]:
        raise NotImplementedError()


@attr.frozen
class Branch:
    junction: Junction
    left: Goal
    right: Goal


_is_node = attr.validators.instance_of(Node)
_is_node_list = attr.validators.instance_of(NodeList)


@attr.frozen(eq=False)
class CompareNodes(Goal):
    left: Node = attr.field(validator=_is_node)
    right: Node = attr.field(validator=_is_node)

    @property
    def measure(self) -> int:
        return 2 * (self.left.size + self.right.size) + 1

    def expand(self) -> Union[bool, Branch]:
        left, right = self.left, self.right
        if left is right:
            return True
        if isinstance(left, Atom) and isinstance(right, Atom):
            return bool(left.value == right.value)
        if isinstance(left, Atom) or isinstance(right, Atom):
            return False
        return Branch(
            Junction.ALL, CompareSubset(left, right), CompareSubset(right, left)
        )


@attr.frozen(eq=False)
class CompareSubset(Goal):
    left: NodeList = attr.field(validator=_is_node_list)
    right: NodeList = attr.field(validator=_is_node_list)

    @property
    def measure(self) -> int:
        return 2 * (self.left.size + self.right.size)

    def expand(self) -> Union[bool, Branch]:
        if not isinstance(self.left, Cons):
            return True
        return Branch(
            Junction.ALL,
            CompareMember(self.left.head, self.right),
            CompareSubset(self.left.tail, self.right),
        )


@attr.frozen(eq=False)
class CompareMember(Goal):
    elem: Node = attr.field(validator=_is_node)
    coll: NodeList = attr.field(validator=_is_node_list)

    @property
    def measure(self) -> int:
        return 2 * (self.elem.size + self.coll.size)

    def expand(self) -> Union[bool, Branch]:
        if not isinstance(self.coll, Cons):
            return False
        return Branch(
            Junction.ANY,
            CompareNodes(self.elem, self.coll.head),
            CompareMember(self.elem, self.coll.tail),
        )


def _limit_exceeded(message: str, goal: Goal, **data) -> StructuralLimitExceeded:
    logger.debug(f"{message} at {type(goal).__name__} (measure {goal.measure})")
    return StructuralLimitExceeded(
        message, pmap(dict(data, goal=type(goal).__name__, measure=goal.measure))
    )


def _check_descent(goal: Goal, branch: Branch) -> None:
    """Verify that both Goals of ``branch`` are strictly smaller than ``goal``.

    Nodes built through the public constructors always satisfy this, since their
    sizes are computed from their children. Nodes whose attributes have been
    rewritten after construction (to form a cycle, for instance) may not."""
    for sub in (branch.left, branch.right):
        if sub.measure >= goal.measure:
            raise _limit_exceeded(
                "Node structure does not decrease",
                goal,
                sub_goal=type(sub).__name__,
                sub_measure=sub.measure,
            )


@attr.frozen
class _Settle:
    """Stack marker recording the outcome of a :py:class:`CompareNodes` Goal once
    every Goal pushed above it has been decided."""

    key: tuple[int, int]


def _settle_key(goal: CompareNodes) -> tuple[int, int]:
    return id(goal.left), id(goal.right)


def decide(goal: Goal, limits: Optional[DecisionLimits] = None) -> bool:
    """Decide ``goal``, returning its truth value.

    Outcomes of Node comparisons are remembered for the duration of the decision
    (in both argument orders), so each pair of Nodes reachable from ``goal`` is
    compared at most once.

    Raises :py:exc:`zfa.lang.exception.StructuralLimitExceeded` if the input Nodes
    fail to shrink as the decision descends into them, or if ``limits`` (by
    default, :py:meth:`DecisionLimits.from_env`) is exceeded."""
    if limits is None:
        limits = DecisionLimits.from_env()
    trace = logger.isEnabledFor(TRACE)

    pending: list[Union[Branch, _Settle]] = []
    settled: dict[tuple[int, int], bool] = {}
    current = goal
    steps = 0

    with timed(
        lambda duration: logger.debug(
            f"Decided {type(goal).__name__} (measure {goal.measure}) in {steps} "
            f"steps ({duration / 1000000}ms)"
        )
    ):
        while True:
            steps += 1
            if limits.max_steps is not None and steps > limits.max_steps:
                raise _limit_exceeded(
                    "Decision step limit exceeded",
                    current,
                    steps=steps,
                    limit=limits.max_steps,
                )

            outcome: Union[bool, Branch, None] = None
            if isinstance(current, CompareNodes):
                outcome = settled.get(_settle_key(current))
            if outcome is None:
                outcome = current.expand()

            if trace:
                shown = (
                    outcome.junction.value if isinstance(outcome, Branch) else outcome
                )
                logger.log(
                    TRACE,
                    f"Step {steps}: {type(current).__name__} "
                    f"(measure {current.measure}) -> {shown}",
                )

            if isinstance(outcome, Branch):
                _check_descent(current, outcome)
                if isinstance(current, CompareNodes):
                    pending.append(_Settle(_settle_key(current)))
                pending.append(outcome)
                if limits.max_depth is not None and len(pending) > limits.max_depth:
                    raise _limit_exceeded(
                        "Decision depth limit exceeded",
                        current,
                        depth=len(pending),
                        limit=limits.max_depth,
                    )
                current = outcome.left
                continue

            # Unwind until some Branch still needs its right operand. That Branch
            # takes the value of its right operand, so it leaves the stack too.
            value = outcome
            next_goal: Optional[Goal] = None
            while pending and next_goal is None:
                frame = pending.pop()
                if isinstance(frame, _Settle):
                    left_id, right_id = frame.key
                    settled[(left_id, right_id)] = settled[(right_id, left_id)] = value
                elif not frame.junction.settles(value):
                    next_goal = frame.right

            if next_goal is None:
                break
            current = next_goal

    return value


def equivalent(n1: Node, n2: Node, limits: Optional[DecisionLimits] = None) -> bool:
    """Return True if ``n1`` and ``n2`` denote the same set-like value.

    Atoms are equivalent when their values are equal. Proper lists are
    equivalent when each is a subset of the other, regardless of the order of
    their elements or of duplicates. Atoms are never equivalent to lists."""
    return decide(CompareNodes(n1, n2), limits)


def subset(l1: NodeList, l2: NodeList, limits: Optional[DecisionLimits] = None) -> bool:
    """Return True if every child of ``l1`` is equivalent to some child of ``l2``."""
    return decide(CompareSubset(l1, l2), limits)


def member(x: Node, l: NodeList, limits: Optional[DecisionLimits] = None) -> bool:
    """Return True if some child of ``l`` is equivalent to ``x``."""
    return decide(CompareMember(x, l), limits)
