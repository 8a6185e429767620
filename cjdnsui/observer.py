from dataclasses import dataclass
from typing import Any, Callable

from cjdnsui.errors import ObserverError, ObserverRegistrationError

ObserverFn = Callable[[Any], Any]


@dataclass(frozen=True)
class Observer:
    topic: int
    fn: ObserverFn


def _callback_name(fn: ObserverFn) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


class Observable:
    """Topic-tagged callback registry.

    Topics are small integers scoped to the owner of the instance, so the same
    number means different things on different Observables. Callbacks run
    synchronously, in registration order, on the calling thread. A callback
    signals failure by raising.

    Callbacks must not register new observers while they are being notified;
    doing so raises ObserverRegistrationError.
    """

    def __init__(self) -> None:
        self._observers: list[Observer] = []
        self._notifying = 0

    def add_observer(self, topic: int, fn: ObserverFn) -> None:
        if self._notifying:
            raise ObserverRegistrationError(
                f"cannot add an observer for topic {int(topic)} during notification"
            )
        self._observers.append(Observer(topic=topic, fn=fn))

    def observers(self, topic: int | None = None) -> list[ObserverFn]:
        return [o.fn for o in self._observers if topic is None or o.topic == topic]

    def _call(self, observer: Observer, data: Any) -> None:
        try:
            observer.fn(data)
        except Exception as exc:
            raise ObserverError(
                observer.topic,
                observer.fn,
                f"observer {_callback_name(observer.fn)} failed on topic {int(observer.topic)}: {exc}",
            ) from exc

    def notify_observers(self, topic: int, data: Any = None) -> None:
        """Call every observer of ``topic`` with ``data``.

        Fail-fast: the first callback that raises stops the sweep, later
        observers are not called, and the failure is re-raised as
        ObserverError.
        """
        self._notifying += 1
        try:
            for observer in self._observers:
                if observer.topic == topic:
                    self._call(observer, data)
        finally:
            self._notifying -= 1

    def broadcast(self, topic: int, data: Any = None) -> list[ObserverError]:
        """Like notify_observers, but calls every observer and returns the failures."""
        failures: list[ObserverError] = []
        self._notifying += 1
        try:
            for observer in self._observers:
                if observer.topic != topic:
                    continue
                try:
                    self._call(observer, data)
                except ObserverError as error:
                    failures.append(error)
        finally:
            self._notifying -= 1
        return failures
