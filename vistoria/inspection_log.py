# vistoria/inspection_log.py
from typing import Iterator, List, Tuple

from vistoria.models import Inspection


class InspectionLog:
    """Append-only list of inspections, newest first."""

    def __init__(self):
        self._items: List[Inspection] = []

    def record(self, inspection: Inspection) -> None:
        self._items.insert(0, inspection)

    def all(self) -> Tuple[Inspection, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Inspection]:
        return iter(self.all())
