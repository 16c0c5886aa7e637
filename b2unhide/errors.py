"""Exception types for the unhide tool."""


class B2UnhideError(Exception):
    """Base class for errors that end the run with a non-zero exit code."""

    exit_code = 1


class EnvironmentCheckError(B2UnhideError):
    """A required executable is missing from PATH."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"required command(s) not found in PATH: {', '.join(missing)}")


class UsageError(B2UnhideError):
    """Invalid or missing command line arguments."""


class ListingError(B2UnhideError):
    """The version listing could not be obtained or parsed."""


class UnhideCommandError(Exception):
    """Unhiding a single file failed.

    Not a B2UnhideError: the reconciler counts these and keeps going.
    """

    def __init__(self, name: str, returncode: int | None = None, stderr: str = ""):
        self.name = name
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or (f"exit code {returncode}" if returncode is not None else "unknown error")
        super().__init__(detail)
