class CardMaxError(Exception):
    pass


class InvalidInput(CardMaxError, ValueError):
    """Caller supplied a value the engine or a store cannot accept."""


class NotFound(CardMaxError, LookupError):
    def __init__(self, kind: str, key: object):
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class InternalError(CardMaxError, RuntimeError):
    """A snapshot broke an invariant the stores are supposed to guarantee."""
