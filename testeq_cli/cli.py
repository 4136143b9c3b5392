#!/usr/bin/env python3
"""
Command line front end for bench test equipment.

    testeq-cli <uri> [<command> [<args>...]]

With no command the device status is printed. 'help' lists the commands
available for the device kind behind the URI. Commands may be abbreviated
to any unambiguous prefix.
"""

import asyncio
import sys

from .src import dmm_commands, psu_commands
from .src.discovery import equipment_from_uri
from .src.equipment import MultimeterEquipment, PowerSupplyEquipment
from .src.errors import CommandLookupError, TesteqError, UsageError
from .src.terminal import ColorPrinter

USAGE = "Usage: testeq-cli <uri> ..."

# Equipment kind -> command module handling it
COMMAND_MODULES = (
    (PowerSupplyEquipment, psu_commands),
    (MultimeterEquipment, dmm_commands),
)


def command_module_for(equipment):
    for kind, module in COMMAND_MODULES:
        if isinstance(equipment, kind):
            return module
    raise CommandLookupError("Unsupported equipment type")


async def run(args):
    if len(args) < 1:
        raise UsageError(USAGE)

    equipment = await equipment_from_uri(args[0])
    module = command_module_for(equipment)
    try:
        await module.handle_command(equipment, args[1:])
    finally:
        await equipment.disconnect()


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        asyncio.run(run(args))
    except TesteqError as exc:
        ColorPrinter.error(str(exc))
        return 1
    except KeyboardInterrupt:
        ColorPrinter.warning("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
