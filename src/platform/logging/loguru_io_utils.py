from inspect import Parameter, getfile, getsourcelines, signature
from os.path import basename
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    DEPTH_LINE,
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MAX_CONTENT_LENGTH = 1000
MASK = '********'

# `password='x'`, `'upi_code': 'x'` and the like inside a repr()
_SENSITIVE_PATTERN = re.compile(
    r"((?:%s)['\"]?\s*[:=]\s*)(['\"])[^'\"]*\2" % '|'.join(sorted(SENSITIVE_KEYWORDS))
)
_POSITIONAL = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_NAMED = (Parameter.POSITIONAL_OR_KEYWORD, Parameter.KEYWORD_ONLY)


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def fetch_layer_depth() -> str:
    return DEPTH_LINE * (call_depth_var.get() - 1)


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    """'seat_repo_impl.py::SeatRepoImpl.occupy:88'"""
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(target))}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """
    Drop arguments the wrapped function cannot take.

    FastAPI and dependency_injector hand the decorated callable everything they resolved,
    the function itself only gets what its signature names.
    """
    try:
        params = list(signature(getattr(func, '__wrapped__', func)).parameters.values())
    except (TypeError, ValueError):
        return args, kwargs
    kinds = {param.kind for param in params}

    if Parameter.VAR_KEYWORD not in kinds:
        named = {param.name for param in params if param.kind in _NAMED}
        kwargs = {key: value for key, value in kwargs.items() if key in named}

    if Parameter.VAR_POSITIONAL not in kinds:
        slots = [p for p in params if p.kind in _POSITIONAL and p.name not in kwargs]
        args = args[: len(slots)]

    return args, kwargs


def mask_sensitive(data: Any) -> Any:
    try:
        data_str = str(data)
    except Exception:
        return data
    masked = _SENSITIVE_PATTERN.sub(rf'\1\2{MASK}\2', data_str)
    return data if masked == data_str else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(content: Any) -> Any:
    content_str = str(content)
    if len(content_str) <= MAX_CONTENT_LENGTH:
        return content
    return f'{content_str[:MAX_CONTENT_LENGTH]}... (truncated {len(content_str)} chars)'
