"""Value classification for configuration trees.

Every value in a config tree falls into exactly one ``ValueKind``. Merging
and cloning switch on the kind rather than probing types ad hoc:

- ATOMIC: dates/times, compiled regular expressions and pending computations
  (awaitables and futures). Always copied by identity.
- CONTAINER: mappings. Merged recursively.
- SEQUENCE: lists and tuples. Replaced wholesale.
- SCALAR: str, bytes, int, float, bool and None.
- OBJECT: anything else. Deep-copied when merged.
"""
import copy
import inspect
import re
from concurrent.futures import Future as ThreadFuture
from datetime import date, time
from enum import Enum
from typing import Any, Dict
from collections.abc import Mapping


class ValueKind(Enum):
    """Closed set of value shapes found in a config tree."""
    ATOMIC = "atomic"
    CONTAINER = "container"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    OBJECT = "object"


_SCALAR_TYPES = (str, bytes, int, float, bool, type(None))


def is_pending(value: Any) -> bool:
    """Return True for values representing a not-yet-resolved result."""
    return inspect.isawaitable(value) or isinstance(value, ThreadFuture)


def classify(value: Any) -> ValueKind:
    """Return the ``ValueKind`` tag for a config value."""
    # date covers datetime
    if isinstance(value, (date, time, re.Pattern)) or is_pending(value):
        return ValueKind.ATOMIC
    if isinstance(value, _SCALAR_TYPES):
        return ValueKind.SCALAR
    if isinstance(value, Mapping):
        return ValueKind.CONTAINER
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.OBJECT


def clone_tree(value: Any) -> Any:
    """Deep-clone a config value.

    Mappings and sequences are rebuilt recursively; atomics and scalars are
    returned as-is so pending computations keep their identity.
    """
    kind = classify(value)
    if kind is ValueKind.CONTAINER:
        cloned: Dict[str, Any] = {}
        for key, item in value.items():
            cloned[key] = clone_tree(item)
        return cloned
    if kind is ValueKind.SEQUENCE:
        items = [clone_tree(item) for item in value]
        return tuple(items) if isinstance(value, tuple) else items
    if kind is ValueKind.OBJECT:
        return copy.deepcopy(value)
    return value
