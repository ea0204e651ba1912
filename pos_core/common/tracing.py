# pos_core/common/tracing.py
from __future__ import annotations

from typing import Any, Dict, Optional

from django.conf import settings
from django.utils.module_loading import import_string


class NullSpan:
    def add_event(self, name: str, attributes: Optional[Dict[str, Any]] = None) -> None:
        return None

    def set_attributes(self, attributes: Dict[str, Any]) -> None:
        return None

    def end(self, *, success: bool = True, error: Optional[BaseException] = None) -> None:
        return None


class NullTracer:
    """
    Default tracer: every call is a no-op so callers never branch on "is tracing on".
    """

    def start_span(self, name: str, attributes: Optional[Dict[str, Any]] = None) -> NullSpan:
        return NullSpan()


def get_tracer():
    """
    POS_TRACER is a dotted path to a zero-arg factory (or class) returning an object
    with start_span(name, attributes) -> span(add_event, set_attributes, end).
    """
    path = getattr(settings, "POS_TRACER", "") or ""
    if not path:
        return NullTracer()
    return import_string(path)()
