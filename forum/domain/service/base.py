"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services hold the rules that span several models or a model and its
    store, such as the one-vote-per-voter invariant. Repository calls go
    through ``StoreCalls`` so store failures leave as domain errors.
    """

    pass
