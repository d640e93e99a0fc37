import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from decimal import Decimal
from fractions import Fraction
from functools import singledispatch
from itertools import islice
from typing import Any, Union, cast

from typing_extensions import TypedDict, Unpack

PrintCountSetting = Union[bool, int, None]

SURPASSED_PRINT_LENGTH = "..."
SURPASSED_PRINT_LEVEL = "#"

PRINT_LENGTH: PrintCountSetting = None
PRINT_LEVEL: PrintCountSetting = None
PRINT_READABLY = True
PRINT_SEPARATOR = " "


class PrintSettings(TypedDict, total=False):
    human_readable: bool
    print_length: PrintCountSetting
    print_level: PrintCountSetting
    print_readably: bool


def _dec_print_level(lvl: PrintCountSetting) -> PrintCountSetting:
    """Decrement the print level if it is numeric."""
    if isinstance(lvl, int) and not isinstance(lvl, bool):
        return lvl - 1
    return lvl


def process_lrepr_kwargs(**kwargs: Unpack[PrintSettings]) -> PrintSettings:
    """Process keyword arguments, decreasing the print-level. Should be called
    after examining the print level for the current level."""
    return cast(
        PrintSettings,
        dict(kwargs, print_level=_dec_print_level(kwargs.get("print_level"))),
    )


class ZFAObject(ABC):
    """Abstract base class for objects which customize their ``__str__`` and
    Python ``__repr__`` representation through :py:func:`lrepr`."""

    __slots__ = ()

    def __repr__(self):
        return self.lrepr()

    def __str__(self):
        return self.lrepr(human_readable=True)

    @abstractmethod
    def _lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        """Private representation method. Callers (including object internal
        callers) should not call this method directly, but instead should use
        the module function :py:func:`lrepr` ."""
        raise NotImplementedError()

    def lrepr(self, **kwargs: Unpack[PrintSettings]) -> str:
        return lrepr(self, **kwargs)


def seq_lrepr(
    iterable: Iterable[Any],
    start: str,
    end: str,
    **kwargs: Unpack[PrintSettings],
) -> str:
    """Produce a representation of a collection, bookended with the start and
    end string supplied. The keyword arguments will be passed along to lrepr
    for the collection elements."""
    print_level = kwargs.get("print_level")
    if (
        isinstance(print_level, int)
        and not isinstance(print_level, bool)
        and print_level < 1
    ):
        return SURPASSED_PRINT_LEVEL

    kwargs = process_lrepr_kwargs(**kwargs)

    trailer = []
    print_length = kwargs.get("print_length")
    if isinstance(print_length, int) and not isinstance(print_length, bool):
        items = list(islice(iterable, print_length + 1))
        if len(items) > print_length:
            items.pop()
            trailer.append(SURPASSED_PRINT_LENGTH)
    else:
        items = list(iterable)

    kw_items = kwargs.copy()
    kw_items["human_readable"] = False
    reprs = [lrepr(o, **kw_items) for o in items]
    return f"{start}{PRINT_SEPARATOR.join(reprs + trailer)}{end}"


# pylint: disable=unused-argument
@singledispatch
def lrepr(
    o: Any,
    human_readable: bool = False,
    print_length: PrintCountSetting = PRINT_LENGTH,
    print_level: PrintCountSetting = PRINT_LEVEL,
    print_readably: bool = PRINT_READABLY,
) -> str:
    """Return a string representation of a node, a Finset, or an atom value.

    Permissible keyword arguments are:
    - human_readable: if logical True, print strings without quotations or
                      escape sequences (default: false)
    - print_length: the number of items in a collection which will be printed,
                    or no limit if bound to a logical falsey value (default: nil)
    - print_level: the depth of the object graph to print, starting with 0, or
                   no limit if bound to a logical falsey value (default: nil)
    - print_readably: if logical false, print strings with non-alphanumeric
                      characters converted to escape sequences (default: true)

    Values without a registered printer use their Python ``repr``."""
    return repr(o)


@lrepr.register(ZFAObject)
def _lrepr_zfa_obj(
    o: ZFAObject,
    human_readable: bool = False,
    print_length: PrintCountSetting = PRINT_LENGTH,
    print_level: PrintCountSetting = PRINT_LEVEL,
    print_readably: bool = PRINT_READABLY,
) -> str:
    return o._lrepr(
        human_readable=human_readable,
        print_length=print_length,
        print_level=print_level,
        print_readably=print_readably,
    )


@lrepr.register(bool)
def _lrepr_bool(o: bool, **_) -> str:
    return repr(o).lower()


@lrepr.register(type(None))
def _lrepr_nil(_: None, **__) -> str:
    return "nil"


@lrepr.register(str)
def _lrepr_str(
    o: str, human_readable: bool = False, print_readably: bool = PRINT_READABLY, **_
) -> str:
    if human_readable:
        return o
    if print_readably is None or print_readably is False:
        return o
    escaped = o.encode("unicode_escape").replace(b'"', rb"\"").decode("utf-8")
    return f'"{escaped}"'


@lrepr.register(float)
def _lrepr_float(o: float, **_) -> str:
    if math.isinf(o):
        return "##Inf" if o > 0 else "##-Inf"
    if math.isnan(o):
        return "##NaN"
    return repr(o)


@lrepr.register(Decimal)
def _lrepr_decimal(o: Decimal, **_) -> str:
    return str(o)


@lrepr.register(Fraction)
def _lrepr_fraction(o: Fraction, **_) -> str:
    return f"{o.numerator}/{o.denominator}"


@lrepr.register(Mapping)
def _lrepr_mapping(o: Mapping, **kwargs: Unpack[PrintSettings]) -> str:
    kw_items = dict(kwargs, human_readable=False)
    entries = PRINT_SEPARATOR.join(
        f"{lrepr(k, **kw_items)} {lrepr(v, **kw_items)}" for k, v in o.items()
    )
    return f"{{{entries}}}"
