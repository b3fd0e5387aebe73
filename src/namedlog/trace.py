"""
Function tracing decorator.

Routes call tracing through a namedlog Logger's ``trace`` method, so the
logger's own level resolution decides whether anything is emitted.
"""

import functools
import inspect
from pathlib import Path


def _short_repr(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, list) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def traced(logger):
    """Decorator factory tracing calls through ``logger.trace``.

    Shows function entry/exit with arguments and return values when the
    logger has trace enabled. Otherwise the wrapped function runs with no
    extra formatting work.
    """
    def decorate(func):
        module = inspect.getmodule(func)
        module_name = module.__name__ if module else "unknown"
        func_name = func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not logger.is_enabled('trace'):
                return func(*args, **kwargs)

            args_repr = [_short_repr(a) for a in args]
            args_repr.extend(f"{k}={_short_repr(v)}" for k, v in kwargs.items())
            args_str = ', '.join(args_repr)

            logger.trace(f">> {module_name}.{func_name}({args_str})")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.trace(f"!! {module_name}.{func_name} raised: {type(e).__name__}: {e}")
                raise

            if result is not None:
                logger.trace(f"<< {module_name}.{func_name} returned: {_short_repr(result)}")
            return result

        return wrapper

    return decorate
