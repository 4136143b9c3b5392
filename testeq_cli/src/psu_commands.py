"""Power supply commands."""

from .command import CommandHandler, Commands
from .equipment import Reading, Unit, resolve_channel
from .errors import ParseError, UsageError

ENABLE_VALUES = {
    "0": False,
    "off": False,
    "false": False,
    "1": True,
    "on": True,
    "true": True,
}


async def handle_command(psu, args):
    await psu.connect()

    if not args:
        return await command_status(psu, args)

    return await psu_commands().run(psu, args)


def psu_commands():
    return Commands(
        "Power Supply",
        [
            CommandHandler("status", "Show status", command_status),
            CommandHandler(
                "enable",
                "Get/set power supply channel enabled",
                command_enable,
                usage="<chan> [<enable>]",
            ),
            CommandHandler(
                "set_voltage",
                "Get/set power supply channel set voltage",
                command_set_voltage,
                usage="<chan> [<voltage>]",
            ),
            CommandHandler(
                "set_current",
                "Get/set power supply channel set current",
                command_set_current,
                usage="<chan> [<current>]",
            ),
            CommandHandler(
                "read_voltage",
                "Get power supply channel readback voltage",
                command_read_voltage,
                usage="<chan>",
            ),
            CommandHandler(
                "read_current",
                "Get power supply channel readback current",
                command_read_current,
                usage="<chan>",
            ),
            CommandHandler(
                "read_power",
                "Get power supply channel readback power",
                command_read_power,
                usage="<chan>",
            ),
        ],
    )


async def command_status(psu, _args):
    for channel in await psu.get_channels():
        async with channel as chan:
            print(f"Channel {chan.name()}")
            print(f"  state: {await chan.get_enabled()}")
            print(f"  set voltage: {Reading(Unit.VOLTAGE, await chan.get_voltage())}")
            print(f"  set current: {Reading(Unit.CURRENT, await chan.get_current())}")
            # Read-back values are live measurements, see read_* commands


def parse_enable(text):
    try:
        return ENABLE_VALUES[text.lower()]
    except KeyError:
        raise ParseError(f"Invalid state value '{text}'") from None


def parse_float(text, what):
    try:
        return float(text)
    except ValueError:
        raise ParseError(f"Invalid {what} value '{text}'") from None


async def command_enable(psu, args):
    if len(args) < 2 or len(args) > 3:
        raise UsageError("Usage: ... enable <channel> [<state>]")

    if len(args) == 3:
        state = parse_enable(args[2])

    async with await resolve_channel(psu, args[1]) as channel:
        if len(args) == 2:
            print(await channel.get_enabled())
        else:
            await channel.set_enabled(state)


async def command_set_voltage(psu, args):
    if len(args) < 2 or len(args) > 3:
        raise UsageError("Usage: ... set_voltage <channel> [<voltage>]")

    async with await resolve_channel(psu, args[1]) as channel:
        if len(args) == 2:
            print(Reading(Unit.VOLTAGE, await channel.get_voltage()))
        else:
            await channel.set_voltage(parse_float(args[2], "voltage"))


async def command_set_current(psu, args):
    if len(args) < 2 or len(args) > 3:
        raise UsageError("Usage: ... set_current <channel> [<current>]")

    async with await resolve_channel(psu, args[1]) as channel:
        if len(args) == 2:
            print(Reading(Unit.CURRENT, await channel.get_current()))
        else:
            await channel.set_current(parse_float(args[2], "current"))


async def command_read_voltage(psu, args):
    if len(args) != 2:
        raise UsageError("Usage: ... read_voltage <channel>")

    async with await resolve_channel(psu, args[1]) as channel:
        print(Reading(Unit.VOLTAGE, await channel.read_voltage()))


async def command_read_current(psu, args):
    if len(args) != 2:
        raise UsageError("Usage: ... read_current <channel>")

    async with await resolve_channel(psu, args[1]) as channel:
        print(Reading(Unit.CURRENT, await channel.read_current()))


async def command_read_power(psu, args):
    if len(args) != 2:
        raise UsageError("Usage: ... read_power <channel>")

    async with await resolve_channel(psu, args[1]) as channel:
        print(Reading(Unit.POWER, await channel.read_power()))
