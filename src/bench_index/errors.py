class BenchIndexError(Exception):
    """Base class for bench-index errors."""


class CatalogError(BenchIndexError):
    """The benchmark catalog is missing or malformed."""


class GhError(BenchIndexError):
    """A GitHub CLI invocation failed."""


class GhNotInstalledError(GhError):
    """The `gh` executable could not be found; not retryable."""


class GhCommandError(GhError):
    """`gh` exited non-zero or timed out; treated as transient and retried."""

    def __init__(self, args: list[str], returncode: int | None, stderr: str = "") -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        details = f": {stderr}" if stderr else ""
        code = "timeout" if returncode is None else f"code {returncode}"
        super().__init__(f"gh {' '.join(args)} failed ({code}){details}")
