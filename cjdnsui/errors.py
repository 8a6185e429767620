from typing import Any, Callable


class CjdnsUiError(Exception):
    """Base class for errors raised by cjdnsui."""


class ObserverError(CjdnsUiError):
    """An observer callback raised while a topic was being notified.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, topic: int, callback: Callable[[Any], Any], message: str) -> None:
        super().__init__(message)
        self.topic = topic
        self.callback = callback


class ObserverRegistrationError(CjdnsUiError):
    pass


class ViewNotRunningError(CjdnsUiError):
    pass


class StatusParseError(CjdnsUiError, ValueError):
    pass
