from __future__ import annotations

from typing import Callable, List

Observer = Callable[[], None]


class ChangeNotifier:
    """Synchronous publish/subscribe channel for "records changed" events.

    Observers take no arguments and run on the caller's thread in the order
    they subscribed. An observer that raises stops the fan-out and the error
    reaches the caller of ``notify``.
    """

    def __init__(self) -> None:
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> Observer:
        self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: Observer) -> bool:
        if observer in self._observers:
            self._observers.remove(observer)
            return True
        return False

    def notify(self) -> None:
        for observer in list(self._observers):
            observer()

    def __len__(self) -> int:
        return len(self._observers)
