from inspect import getfile, getsourcelines
from os.path import basename
import re
from time import time
from typing import Any, Callable

from eventhub.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MASK = '********'
MAX_CONTENT_LENGTH = 500

_KEYWORD_ALTERNATION = '|'.join(
    sorted((re.escape(k) for k in SENSITIVE_KEYWORDS), key=len, reverse=True)
)
# `password='...'`, `"token": "..."` and `hashed_password=b'...'` as they appear in repr() output
_SENSITIVE_PATTERN = re.compile(
    rf"""(['"]?(?:{_KEYWORD_ALTERNATION})['"]?\s*[=:]\s*b?)(['"])(.*?)\2""", re.IGNORECASE
)


def enter_call() -> float:
    """Bump the nesting depth; returns when the outermost traced call started"""
    call_depth_var.set(call_depth_var.get() + 1)
    started = chain_start_time_var.get()
    if not started:
        started = time()
        chain_start_time_var.set(started)
    return started


def leave_call() -> None:
    depth = call_depth_var.get() - 1
    call_depth_var.set(depth)
    if depth <= 0:
        chain_start_time_var.set(0)


def describe_call_target(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        lineno = getsourcelines(target)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(target))}::{target.__qualname__}:{lineno}'


def mask_sensitive(data: Any) -> Any:
    text = str(data)
    masked = _SENSITIVE_PATTERN.sub(rf'\1\2{MASK}\2', text)
    return data if masked == text else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(content: Any) -> Any:
    text = str(content)
    if len(text) <= MAX_CONTENT_LENGTH:
        return content
    return f'{text[:MAX_CONTENT_LENGTH]}... ({len(text)} chars)'
