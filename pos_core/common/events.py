# pos_core/common/events.py
import logging
from collections import defaultdict
from typing import Callable, Dict, List, Any

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], None]

_registry: Dict[str, List[Handler]] = defaultdict(list)


def subscribe(event_name: str):
    """
    Decorator to register a handler.

    Usage:
        @subscribe("workspace.created")
        def on_workspace_created(payload): ...
    """
    def _decorator(fn: Handler) -> Handler:
        _registry[event_name].append(fn)
        return fn

    return _decorator


def unsubscribe(event_name: str, fn: Handler) -> None:
    handlers = _registry.get(event_name, [])
    if fn in handlers:
        handlers.remove(fn)


def publish(event_name: str, payload: Dict[str, Any]) -> None:
    """
    Synchronous in-process publish.
    Payloads carry ids as strings so handlers never hold ORM instances.
    """
    handlers = list(_registry.get(event_name, []))
    logger.debug("publish %s -> %d handler(s)", event_name, len(handlers))
    for handler in handlers:
        handler(payload)
