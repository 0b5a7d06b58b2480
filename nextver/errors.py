class NextVersionError(Exception):
    pass


class ParseError(NextVersionError, ValueError):
    """A string is not a valid semantic version."""


class RepositoryAccessError(NextVersionError, RuntimeError):
    """The repository could not be opened or a reference did not resolve."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str | None = None):
        super().__init__(message)
        self.command = command
        self.stderr = stderr

    def __str__(self) -> str:
        msg = super().__str__()
        if self.stderr:
            return f"{msg}: {self.stderr.strip()}"
        return msg
