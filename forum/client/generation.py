"""Generation tokens for dropping stale responses.

A view bumps its generation whenever it starts a request whose result
replaces earlier state. When the response arrives, the view applies it
only if its token is still the newest one and the view is still open.
"""


class Generation:
    """Monotonically increasing request token for one view.

    Usage:
        token = generation.next()
        result = await fetch()
        if generation.is_current(token):
            apply(result)
    """

    def __init__(self) -> None:
        self._value = 0
        self._closed = False

    @property
    def value(self) -> int:
        return self._value

    @property
    def closed(self) -> bool:
        return self._closed

    def next(self) -> int:
        """Start a new request; every earlier token becomes stale."""
        self._value += 1
        return self._value

    def is_current(self, token: int) -> bool:
        """Whether a response started with ``token`` may still be applied."""
        return not self._closed and token == self._value

    def close(self) -> None:
        """Mark the view as gone; no token is current afterwards."""
        self._closed = True
