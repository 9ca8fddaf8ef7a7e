"""
debug_trace.py

Opt-in tracing of the chart canvas lifecycle and pointer events.

Set PEDIGREE_DEBUG_TRACE=1 to enable tracing and PEDIGREE_TRACE_EVENTS=1 to
also trace every pointer event (very verbose). Trace lines are emitted on the
"pedigree.trace" logger, which writes to stderr and to the file named by
PEDIGREE_DEBUG_LOG (default pedigree_chart_debug.log, empty for stderr only).
"""

import logging
import os
from functools import wraps


def _flag(name: str) -> bool:
    return os.environ.get(name, "") not in ("", "0", "false", "False")


DEBUG_TRACE = _flag("PEDIGREE_DEBUG_TRACE")
TRACE_EVENTS = _flag("PEDIGREE_TRACE_EVENTS")
LOG_FILE = os.environ.get("PEDIGREE_DEBUG_LOG", "pedigree_chart_debug.log")

TRACE_FORMAT = "[%(asctime)s.%(msecs)03d] [%(category)s] %(message)s"

log = logging.getLogger("pedigree.trace")


def _configure() -> None:
    """Attach the stderr and file handlers on first use."""
    if log.handlers:
        return
    formatter = logging.Formatter(TRACE_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler()]
    if LOG_FILE:
        handlers.append(logging.FileHandler(LOG_FILE, mode="w", encoding="utf-8", delay=True))
    for handler in handlers:
        handler.setFormatter(formatter)
        log.addHandler(handler)
    log.setLevel(logging.DEBUG)
    log.propagate = False


def trace(msg: str, category: str = "INFO"):
    """Emit a trace line in ``category`` if tracing is enabled."""
    if not DEBUG_TRACE:
        return
    if category == "EVENT" and not TRACE_EVENTS:
        return
    _configure()
    log.debug(msg, extra={"category": category})


def _state_suffix(obj) -> str:
    state = getattr(obj, "state", None)
    return f" [{state}]" if isinstance(state, str) else ""


def trace_call(category: str = "CALL"):
    """
    Decorator tracing entry and exit of a method.

    For objects with a ``state`` (such as the chart canvas) the state before
    and after the call is part of the trace, so lifecycle transitions show up
    as e.g. ``>>> ChartCanvas.initialize [uninitialized]`` followed by
    ``<<< ChartCanvas.initialize [initialized]``.
    """
    def decorator(func):
        if not DEBUG_TRACE:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__qualname__
            owner = args[0] if args else None
            trace(f">>> {func_name}{_state_suffix(owner)}", category)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                trace(f"!!! {func_name} raised {type(e).__name__}: {e}{_state_suffix(owner)}", "ERROR")
                raise
            trace(f"<<< {func_name}{_state_suffix(owner)}", category)
            return result
        return wrapper
    return decorator
