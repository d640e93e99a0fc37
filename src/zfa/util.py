import contextlib
import os
import time
from collections.abc import Iterator
from typing import Callable, Optional


@contextlib.contextmanager
def timed(f: Callable[[int], None]) -> Iterator[None]:
    """Call ``f`` with the number of nanoseconds spent in the with-block.

    ``f`` is not called if the block raises."""
    start = time.perf_counter_ns()
    yield
    f(time.perf_counter_ns() - start)


def getenv_int(name: str) -> Optional[int]:
    """Return the integer value of the environment variable ``name``, or None if
    it is unset or blank."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer; got {raw!r}") from e
