"""Terminal utility for colored output."""

import os
import sys


class ColorPrinter:
    """
    Utility for printing colored text to the terminal using ANSI escape codes.

    Colors are dropped when the target stream is not a TTY or NO_COLOR is set,
    so command output stays clean when piped into scripts.
    """

    # ANSI Color Codes
    HEADER = "\033[95m"
    CYAN = "\033[96m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"
    BOLD = "\033[1m"

    @staticmethod
    def _use_color(stream):
        if os.environ.get("NO_COLOR"):
            return False
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    @staticmethod
    def _emit(color, message, stream=None):
        stream = stream or sys.stdout
        if ColorPrinter._use_color(stream):
            print(f"{color}{message}{ColorPrinter.RESET}", file=stream)
        else:
            print(message, file=stream)

    @staticmethod
    def warning(message):
        """Print a warning message in yellow to stderr."""
        ColorPrinter._emit(ColorPrinter.YELLOW, f"[WARNING] {message}", sys.stderr)

    @staticmethod
    def error(message):
        """Print an error message in red to stderr."""
        ColorPrinter._emit(ColorPrinter.RED, f"[ERROR] {message}", sys.stderr)

    @staticmethod
    def debug(message):
        """Print a diagnostic message in cyan to stderr."""
        ColorPrinter._emit(ColorPrinter.CYAN, f"[DEBUG] {message}", sys.stderr)

    @staticmethod
    def header(message):
        """Print a bold header line in magenta."""
        ColorPrinter._emit(ColorPrinter.HEADER + ColorPrinter.BOLD, message)
