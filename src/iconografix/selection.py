"""Selection state for the icon browser.

SelectionStore is the only owner of "what is selected". Every mutation
pushes the full new snapshot to subscribers before returning.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List

from .catalog.models import ItemRecord

Subscriber = Callable[[List[ItemRecord]], None]


class SelectionMode(str, Enum):
    SINGLE = "single"
    MULTI = "multi"


class SelectionStore:
    """Ordered selection of catalog items in single or multi mode."""

    def __init__(self, mode: SelectionMode = SelectionMode.SINGLE):
        self._mode = SelectionMode(mode)
        self._selected: List[ItemRecord] = []
        self._subscribers: List[Subscriber] = []

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    # --- Subscriptions ---

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for snapshots; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, selected: List[ItemRecord]) -> None:
        self._selected = selected
        for callback in list(self._subscribers):
            callback(self.snapshot())

    # --- Mutations ---

    def toggle(self, item: ItemRecord) -> None:
        """Single mode: select exactly ``item``. Multi mode: flip membership."""
        if self._mode is SelectionMode.SINGLE:
            self._publish([item])
        elif self.is_selected(item):
            self._publish([i for i in self._selected if i.id != item.id])
        else:
            self._publish(self._selected + [item])

    def add(self, item: ItemRecord) -> None:
        if self._mode is SelectionMode.SINGLE:
            self._publish([item])
        elif self.is_selected(item):
            self._publish(list(self._selected))
        else:
            self._publish(self._selected + [item])

    def remove(self, item: ItemRecord) -> None:
        """Single mode clears everything, whichever item is passed."""
        if self._mode is SelectionMode.SINGLE:
            self._publish([])
        else:
            self._publish([i for i in self._selected if i.id != item.id])

    def clear(self) -> None:
        self._publish([])

    def set_mode(self, mode: SelectionMode) -> None:
        """Switch modes. Going to single keeps only the earliest selection."""
        self._mode = SelectionMode(mode)
        if self._mode is SelectionMode.SINGLE:
            self._publish(self._selected[:1])
        else:
            self._publish(list(self._selected))

    # --- Queries ---

    def snapshot(self) -> List[ItemRecord]:
        return list(self._selected)

    def is_selected(self, item: ItemRecord) -> bool:
        return any(i.id == item.id for i in self._selected)

    def count(self) -> int:
        return len(self._selected)

    def __len__(self) -> int:
        return len(self._selected)
