"""Log listener errors."""


class UnsupportedLogKindError(Exception):
    """Raised when a log event names a kind the logger has no method for.

    This is a programming error on the publishing side, so it is raised
    rather than returned as a Result.

    Attributes:
        kind: The unsupported log kind value.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Logger has no method for log kind {kind!r}")
