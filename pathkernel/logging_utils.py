"""DEBUG-level call tracing for the numerically heavy modules.

Modules opt in by calling :func:`apply_debug_logging` on their namespace. The
wrappers cost a single ``isEnabledFor`` check per call while DEBUG is off.
"""

from __future__ import annotations

import inspect
import logging
import numbers
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxdict = 8

_WRAPPED_MARKER = "_pathkernel_traced"


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def _is_curve_values(value: Any) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) == 8
        and all(isinstance(item, numbers.Real) for item in value)
    )


def _summarize_curve_values(values: Sequence[float]) -> str:
    pairs = [f"({_fmt(values[i])}, {_fmt(values[i + 1])})" for i in range(0, 8, 2)]
    return "curve[" + " ".join(pairs) + "]"


def _summarize_array(array: np.ndarray, max_items: int) -> str:
    head = f"ndarray(shape={tuple(array.shape)}, dtype={array.dtype}"
    if array.size == 0:
        return head + ")"
    if array.size <= max_items:
        return head + f", values={_repr.repr(array.tolist())})"
    if np.issubdtype(array.dtype, np.number):
        return head + f", min={_fmt(float(array.min()))}, max={_fmt(float(array.max()))})"
    return head + ")"


def _safe_repr(value: Any, *, max_items: int = 6, max_length: int = 400) -> str:
    if isinstance(value, np.ndarray):
        return _summarize_array(value, max_items)
    if _is_curve_values(value):
        return _summarize_curve_values(value)
    if isinstance(value, float):
        return _fmt(value)
    if isinstance(value, (list, tuple)):
        opening, closing = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        parts = [_safe_repr(item, max_items=max_items) for item in value[:max_items]]
        if len(value) > max_items:
            parts.append(f"... {len(value) - max_items} more")
        return opening + ", ".join(parts) + closing
    if isinstance(value, dict):
        parts = [
            f"{_safe_repr(key)}: {_safe_repr(item)}"
            for key, item in list(value.items())[:max_items]
        ]
        if len(value) > max_items:
            parts.append("...")
        return "{" + ", ".join(parts) + "}"
    rendered = _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_call(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    rendered = [_safe_repr(arg) for arg in args]
    rendered.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return ", ".join(rendered)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls, results and exceptions at DEBUG."""

    def decorator(func: F) -> F:
        if getattr(func, _WRAPPED_MARKER, False):
            return func

        label = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            tracing = logger.isEnabledFor(logging.DEBUG)
            if tracing:
                logger.debug("-> %s(%s)", label, _format_call(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                if tracing:
                    logger.debug("!! %s raised", label, exc_info=True)
                raise
            if tracing:
                if log_result:
                    logger.debug("<- %s = %s", label, _safe_repr(result))
                else:
                    logger.debug("<- %s", label)
            return result

        setattr(wrapper, _WRAPPED_MARKER, True)
        return cast(F, wrapper)

    return decorator


def _trace_class(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr_name, attr_value in list(cls.__dict__.items()):
        if attr_name.startswith("__") and attr_name.endswith("__"):
            continue
        qualified = f"{cls.__name__}.{attr_name}"
        if attr_name in skip or qualified in skip:
            continue
        if isinstance(attr_value, (staticmethod, classmethod)):
            func = attr_value.__func__
            if getattr(func, "__module__", None) != cls.__module__:
                continue
            wrapped = debug_log_call(logger, name=qualified)(func)
            setattr(cls, attr_name, type(attr_value)(wrapped))
        elif inspect.isfunction(attr_value) and attr_value.__module__ == cls.__module__:
            setattr(cls, attr_name, debug_log_call(logger, name=qualified)(attr_value))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
    wrap_methods: bool = True,
) -> None:
    """Wrap the functions (and class methods) defined in ``namespace`` with tracing.

    ``skip`` names functions, attributes or ``Class.attribute`` pairs to leave
    untouched; properties are never wrapped.
    """

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name if isinstance(module_name, str) else __name__)
    skip_set: Set[str] = set(skip or ())

    for name, value in list(namespace.items()):
        if name in skip_set or getattr(value, "__module__", None) != module_name:
            continue
        if inspect.isfunction(value):
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif wrap_methods and inspect.isclass(value):
            _trace_class(value, logger, skip_set)


__all__ = ["apply_debug_logging", "debug_log_call"]
