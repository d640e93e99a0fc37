import logging
import threading

from zfa import logconfig
from zfa.lang.relation import DecisionLimits

logger = logging.getLogger(__name__)

_INIT_LOCK = threading.Lock()
_is_initialized = False


def init(force_reload: bool = False) -> DecisionLimits:
    """Configure ZFA lists for an application from the environment.

    This installs the ``zfa`` log handler (see :py:mod:`zfa.logconfig`) and reads
    the decision limits named by ``ZFA_MAX_STEPS`` and ``ZFA_MAX_DEPTH``, so that a
    malformed limit is reported at startup rather than on the first decision.
    Returns the limits which decisions will use.

    ``init()`` may be called more than once. Only the first invocation configures
    logging unless ``force_reload=True``."""
    global _is_initialized

    with _INIT_LOCK:
        limits = DecisionLimits.from_env()
        if not _is_initialized or force_reload:
            logconfig.configure_root_logger()
            _is_initialized = True
        logger.debug(f"Initialized with {limits}")
        return limits
