"""Build error kinds: per-document skips and run-aborting I/O failures"""


class MalformedDocument(ValueError):
    """A document whose frontmatter is missing or invalid. Skipped and reported."""

    def __init__(self, reason: str, path: str = None):
        self.reason = reason
        self.path = path
        super().__init__(f"{path}: {reason}" if path else reason)

    def with_path(self, path: str) -> "MalformedDocument":
        return MalformedDocument(self.reason, path)


class IOFailure(RuntimeError):
    """Reading input or writing output failed. Aborts the run."""
