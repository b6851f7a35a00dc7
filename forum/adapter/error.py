"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class PushChannelError(AdapterError):
    """Push channel failure (closed channel, overflowing subscriber)."""

    pass
