import attr
from pyrsistent import PMap

from zfa.lang.interfaces import IExceptionInfo
from zfa.lang.obj import lrepr


@attr.define(repr=False, str=False)
class StructuralLimitExceeded(IExceptionInfo):
    """Raised when a decision cannot make progress on its input.

    Well-formed nodes always shrink as the decision engine descends into them.
    This exception signals either a node graph which was fabricated outside of
    the public constructors (such as a cycle) or a decision which exceeded one
    of the configured :py:class:`zfa.lang.relation.DecisionLimits`."""

    message: str
    data: PMap

    def __repr__(self):
        return (
            f"zfa.lang.exception.StructuralLimitExceeded({self.message}, "
            f"{lrepr(self.data)})"
        )

    def __str__(self):
        return f"{self.message} {lrepr(self.data)}"
