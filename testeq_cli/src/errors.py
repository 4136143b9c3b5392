"""Exception hierarchy for testeq-cli.

Every error propagates untouched to the entry point, which prints the
message and exits with a failure status. Nothing here is retried.
"""


class TesteqError(Exception):
    """Base exception for all command and device failures."""


class UsageError(ValueError, TesteqError):
    """Wrong argument count or a missing command."""


class CommandLookupError(LookupError, TesteqError):
    """Unknown command token or unresolvable channel selector."""


class AmbiguousCommandError(CommandLookupError):
    """A command token is a prefix of more than one command name."""

    def __init__(self, token, candidates):
        self.token = token
        self.candidates = list(candidates)
        super().__init__(
            f"Ambiguous command '{token}', multiple matches: {self.candidates}"
        )


class ParseError(ValueError, TesteqError):
    """Malformed numeric or enumerated value supplied by the user."""


class DeviceError(TesteqError):
    """Failure reported by the instrument or its transport."""
