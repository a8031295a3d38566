"""Helpers behind @Logger.io: call-chain timing, argument fitting and log redaction"""

from inspect import Parameter, getfile, getsourcelines, signature
from os.path import basename
import re
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)

MAX_CONTENT_LENGTH = 1000
REDACTED = '********'

# `phone='...'` (attrs repr) and `'phone': '...'` (dict repr)
_KEYWORD_VALUE_PATTERN = re.compile(
    r"(?P<key>\b(?:%s)\b'?)(?P<sep>=|: )'[^']*'" % '|'.join(sorted(SENSITIVE_KEYWORDS))
)
_EMAIL_PATTERN = re.compile(r'(?P<head>[A-Za-z0-9])[A-Za-z0-9._%+-]*@(?P<domain>[A-Za-z0-9.-]+)')

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_NAMED_KINDS = (Parameter.POSITIONAL_OR_KEYWORD, Parameter.KEYWORD_ONLY)


# =============================================================================
# Call chain
# =============================================================================
def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def leave_call_chain() -> None:
    depth = call_depth_var.get() - 1
    call_depth_var.set(depth)
    if not depth:
        chain_start_time_var.set(0)


def describe_call_target(func: Callable[..., Any]) -> str:
    """`file.py::Qualified.name:line` of the decorated function"""
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def fit_call_arguments(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Drop arguments the target cannot accept.

    FastAPI and dependency_injector may hand a wrapped callable more keyword
    arguments than its own signature declares.
    """
    params = list(signature(getattr(func, '__wrapped__', func)).parameters.values())
    kinds = {param.kind for param in params}

    if Parameter.VAR_KEYWORD not in kinds:
        accepted = {param.name for param in params if param.kind in _NAMED_KINDS}
        kwargs = {key: value for key, value in kwargs.items() if key in accepted}

    if Parameter.VAR_POSITIONAL not in kinds:
        slots = [p for p in params if p.kind in _POSITIONAL_KINDS and p.name not in kwargs]
        args = args[: len(slots)]

    return args, kwargs


# =============================================================================
# Redaction
# =============================================================================
def redact_email(text: str) -> str:
    """maria.silva@example.com -> m***@example.com"""
    return _EMAIL_PATTERN.sub(r'\g<head>***@\g<domain>', text)


def redact_text(data: Any) -> Any:
    """Hide phone numbers and passwords in a repr and shorten customer emails.

    Returns `data` untouched when nothing in it needed hiding.
    """
    try:
        text = str(data)
    except Exception:
        return data
    redacted = redact_email(_KEYWORD_VALUE_PATTERN.sub(rf"\g<key>\g<sep>'{REDACTED}'", text))
    return data if redacted == text else redacted


def redact_keyword(keyword: Any, value: Any) -> Any:
    return REDACTED if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(data: Any) -> Any:
    text = data if isinstance(data, str) else repr(data)
    if len(text) <= MAX_CONTENT_LENGTH:
        return data
    return f'{text[:MAX_CONTENT_LENGTH]}... (truncated {len(text) - MAX_CONTENT_LENGTH} chars)'
