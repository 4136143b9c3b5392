"""
Command table and dispatcher shared by every device command module.

A command token selects a handler by prefix, so any unambiguous abbreviation
of a command name works ("stat" runs "status"). When a token is a prefix of
several names the dispatcher refuses to guess, even if one of them is an
exact match.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from .errors import AmbiguousCommandError, CommandLookupError, UsageError
from .terminal import ColorPrinter

CommandCallback = Callable[[object, Sequence[str]], Awaitable[None]]


@dataclass(frozen=True)
class CommandHandler:
    """Binds a command name to its coroutine, argument hint and help text.

    The callback receives the device and the full argument list, including
    the command token itself at index 0.
    """

    name: str
    help: str
    callback: CommandCallback
    usage: Optional[str] = None

    def help_line(self) -> str:
        if self.usage:
            return f"  {self.name} {self.usage}: {self.help}"
        return f"  {self.name}: {self.help}"


class Commands:
    """Resolves command tokens against an ordered handler table."""

    def __init__(self, module_name: str, handlers: Sequence[CommandHandler]):
        self.module_name = module_name
        self.handlers: List[CommandHandler] = list(handlers)

    def help_title(self) -> str:
        return f"{self.module_name} commands:"

    def help_text(self) -> str:
        lines = [self.help_title()]
        lines.extend(hdlr.help_line() for hdlr in self.handlers)
        return "\n".join(lines)

    def print_help(self):
        title, *lines = self.help_text().split("\n")
        ColorPrinter.header(title)
        for line in lines:
            print(line)

    def matches(self, token: str) -> List[CommandHandler]:
        """Return every handler whose name starts with token, in table order."""
        return [hdlr for hdlr in self.handlers if hdlr.name.startswith(token)]

    def resolve(self, token: str) -> CommandHandler:
        """
        Resolve a token to exactly one handler.

        Raises:
            CommandLookupError: nothing starts with token.
            AmbiguousCommandError: more than one name starts with token.
        """
        handlers = self.matches(token)
        if not handlers:
            raise CommandLookupError(f"No command matching '{token}'")
        if len(handlers) > 1:
            raise AmbiguousCommandError(token, [hdlr.name for hdlr in handlers])
        return handlers[0]

    async def run(self, device, args: Sequence[str]):
        if not args:
            raise UsageError("Missing command argument")

        token = args[0]
        if token == "help":
            self.print_help()
            return None

        handler = self.resolve(token)
        return await handler.callback(device, args)
