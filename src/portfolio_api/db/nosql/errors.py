from __future__ import annotations


class ResourceStoreError(RuntimeError):
    """A storage fault raised while operating on one resource kind.

    The message is safe to surface to API callers; the driver exception is
    kept on ``__cause__`` for logs.
    """

    def __init__(self, resource: str, operation: str, message: str):
        self.resource = resource
        self.operation = operation
        super().__init__(message)


class MalformedIdentifierError(ValueError):
    """A canonical-shaped identifier that the driver refused to parse."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Malformed identifier: {raw!r}")
