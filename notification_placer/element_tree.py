"""Depth-first search and geometry primitives over an accessibility element tree.

The tree itself is owned by the operating system. Everything here goes through
an ``ElementAccessor`` so the search logic can run against the live AX API or an
in-memory fake without changes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence

from notification_placer.geometry import Point, Size

ATTR_CHILDREN = "AXChildren"
ATTR_IDENTIFIER = "AXIdentifier"
ATTR_POSITION = "AXPosition"
ATTR_SIZE = "AXSize"
ATTR_SUBROLE = "AXSubrole"

BANNER_SUBROLES = ("AXNotificationCenterBanner", "AXNotificationCenterAlert")
WIDGET_IDENTIFIER_PREFIX = "widget-local"

Predicate = Callable[[Any], bool]


class ElementAccessor(Protocol):
    """Attribute access over opaque element handles.

    ``get_attribute`` returns ``None`` when the attribute is absent or the read
    failed. Sizes and positions cross this boundary as ``(a, b)`` tuples.
    """

    def get_attribute(self, element: Any, name: str) -> Optional[Any]:
        ...

    def set_attribute(self, element: Any, name: str, value: Any) -> bool:
        ...


def _children(accessor: ElementAccessor, element: Any) -> Sequence[Any]:
    children = accessor.get_attribute(element, ATTR_CHILDREN)
    if not children:
        return ()
    try:
        return list(children)
    except TypeError:
        return ()


def find_first(accessor: ElementAccessor, root: Any, predicate: Predicate) -> Optional[Any]:
    """Return the first element (pre-order) under ``root`` matching ``predicate``."""
    if predicate(root):
        return root
    for child in _children(accessor, root):
        found = find_first(accessor, child, predicate)
        if found is not None:
            return found
    return None


def count_matching(accessor: ElementAccessor, elements: Iterable[Any], predicate: Predicate) -> int:
    return sum(1 for element in elements if predicate(element))


def subrole_in(accessor: ElementAccessor, subroles: Sequence[str]) -> Predicate:
    targets = frozenset(subroles)

    def _matches(element: Any) -> bool:
        subrole = accessor.get_attribute(element, ATTR_SUBROLE)
        return isinstance(subrole, str) and subrole in targets

    return _matches


def identifier_has_prefix(accessor: ElementAccessor, prefix: str) -> Predicate:
    def _matches(element: Any) -> bool:
        identifier = accessor.get_attribute(element, ATTR_IDENTIFIER)
        return isinstance(identifier, str) and identifier.startswith(prefix)

    return _matches


def _pair(value: Any) -> Optional[tuple[float, float]]:
    if value is None:
        return None
    try:
        first, second = value
        return float(first), float(second)
    except (TypeError, ValueError):
        return None


def get_size(accessor: ElementAccessor, element: Any) -> Optional[Size]:
    pair = _pair(accessor.get_attribute(element, ATTR_SIZE))
    if pair is None:
        return None
    return Size(width=pair[0], height=pair[1])


def get_position(accessor: ElementAccessor, element: Any) -> Optional[Point]:
    pair = _pair(accessor.get_attribute(element, ATTR_POSITION))
    if pair is None:
        return None
    return Point(x=pair[0], y=pair[1])


def set_position(accessor: ElementAccessor, element: Any, x: float, y: float) -> bool:
    return bool(accessor.set_attribute(element, ATTR_POSITION, (float(x), float(y))))


@dataclass(eq=False)
class InMemoryElement:
    """Plain element used by tests and dry runs."""

    attributes: Dict[str, Any] = field(default_factory=dict)
    children: List["InMemoryElement"] = field(default_factory=list)
    writable: bool = True
    name: str = ""

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"InMemoryElement({self.name or id(self)})"


class InMemoryAccessor:
    """``ElementAccessor`` over ``InMemoryElement`` trees; records every write."""

    def __init__(self) -> None:
        self.writes: List[tuple[InMemoryElement, str, Any]] = []
        self.reads = 0

    def get_attribute(self, element: InMemoryElement, name: str) -> Optional[Any]:
        self.reads += 1
        if name == ATTR_CHILDREN:
            return list(element.children) if element.children else None
        return element.attributes.get(name)

    def set_attribute(self, element: InMemoryElement, name: str, value: Any) -> bool:
        if not element.writable:
            return False
        self.writes.append((element, name, value))
        element.attributes[name] = value
        return True
