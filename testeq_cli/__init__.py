__version__ = "0.1.0"

from .src.command import CommandHandler, Commands
from .src.discovery import equipment_from_uri
from .src.equipment import (
    DmmMode,
    LockedChannel,
    MultimeterEquipment,
    PowerSupplyEquipment,
    Reading,
    TriggerSource,
    Unit,
)
from .src.errors import (
    AmbiguousCommandError,
    CommandLookupError,
    DeviceError,
    ParseError,
    TesteqError,
    UsageError,
)
from .src.terminal import ColorPrinter

__all__ = [
    "CommandHandler",
    "Commands",
    "equipment_from_uri",
    "DmmMode",
    "LockedChannel",
    "MultimeterEquipment",
    "PowerSupplyEquipment",
    "Reading",
    "TriggerSource",
    "Unit",
    "AmbiguousCommandError",
    "CommandLookupError",
    "DeviceError",
    "ParseError",
    "TesteqError",
    "UsageError",
    "ColorPrinter",
]
