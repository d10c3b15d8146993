"""Dotted-path access into configuration trees."""
from typing import Any, List, MutableMapping, Sequence, Union

from src.cascade_config.config.tree import ValueKind, classify


PathLike = Union[str, Sequence[str]]


class _Missing:
    """Sentinel type for a path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def split_path(path: PathLike) -> List[str]:
    """Normalize a dotted string or segment sequence into a list of segments."""
    if isinstance(path, str):
        return path.split(".") if path else []
    return [str(segment) for segment in path]


def set_path(target: MutableMapping[str, Any], path: PathLike, value: Any) -> None:
    """Set ``value`` at ``path`` inside ``target``, creating dicts as needed.

    A ``None`` value or an empty path is ignored, so unresolved substitutions
    never create keys.

    Args:
        target: Mapping to mutate in place
        path: Dotted string or list of segments
        value: Value to set
    """
    segments = split_path(path)
    if value is None or not segments:
        return

    if len(segments) == 1:
        target[segments[0]] = value
        return

    next_key = segments[0]
    if next_key not in target:
        target[next_key] = {}
    set_path(target[next_key], segments[1:], value)


def _lookup(node: Any, segment: str) -> Any:
    kind = classify(node)
    if kind is ValueKind.CONTAINER:
        return node.get(segment, MISSING)
    if kind is ValueKind.SEQUENCE and segment.isdecimal():
        index = int(segment)
        return node[index] if index < len(node) else MISSING
    return MISSING


def get_path(tree: Any, path: PathLike) -> Any:
    """Resolve ``path`` against ``tree``.

    Args:
        tree: Config tree (or any nested mapping/sequence)
        path: Dotted string or list of segments

    Returns:
        The value found, which may be None, or ``MISSING`` when any
        segment does not resolve or traversal hits a non-container.
    """
    segments = split_path(path)
    if not segments:
        return MISSING

    value = _lookup(tree, segments[0])
    if len(segments) == 1:
        return value

    if value is None or value is MISSING:
        return MISSING
    if classify(value) not in (ValueKind.CONTAINER, ValueKind.SEQUENCE):
        return MISSING

    return get_path(value, segments[1:])
