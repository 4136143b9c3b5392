"""Multimeter commands."""

from .command import CommandHandler, Commands
from .equipment import DmmMode, TriggerSource, resolve_channel
from .errors import UsageError


async def handle_command(dmm, args):
    await dmm.connect()

    if not args:
        return await command_status(dmm, args)

    return await dmm_commands().run(dmm, args)


def dmm_commands():
    return Commands(
        "Multimeter",
        [
            CommandHandler("status", "Show status", command_status),
            CommandHandler(
                "mode",
                "Get/set DMM channel mode",
                command_mode,
                usage="<chan> [<mode>]",
            ),
            CommandHandler(
                "read",
                "Read current DMM channel reading",
                command_read,
                usage="<chan>",
            ),
            CommandHandler(
                "read_now",
                "Trigger DMM and get reading from channel",
                command_read_now,
                usage="<chan>",
            ),
            CommandHandler(
                "trig_source",
                "Get/set DMM trigger source",
                command_trig_source,
                usage="[<source>]",
            ),
            CommandHandler("arm", "Arm trigger", command_arm),
        ],
    )


async def command_status(dmm, _args):
    print(f"trig mode: {await dmm.get_trigger_source()}")
    for channel in await dmm.get_channels():
        async with channel as chan:
            print(f"Channel {chan.name()}")
            print(f"  mode: {await chan.get_mode()}")
            # No reading here: with a bus or external trigger it would block
            # or consume the pending trigger.


async def command_mode(dmm, args):
    if len(args) < 2 or len(args) > 3:
        raise UsageError("Usage: ... mode <channel> [<mode>]")

    async with await resolve_channel(dmm, args[1]) as channel:
        if len(args) == 2:
            print(await channel.get_mode())
        else:
            await channel.set_mode(DmmMode.parse(args[2]), None)


async def command_read(dmm, args):
    if len(args) != 2:
        raise UsageError("Usage: ... read <channel>")

    async with await resolve_channel(dmm, args[1]) as channel:
        print(await channel.get_reading())


async def command_read_now(dmm, args):
    if len(args) != 2:
        raise UsageError("Usage: ... read_now <channel>")

    async with await resolve_channel(dmm, args[1]) as channel:
        await dmm.trigger_arm()
        await dmm.trigger_now()
        print(await channel.get_reading())


async def command_trig_source(dmm, args):
    if len(args) > 2:
        raise UsageError("Usage: ... trig_source [<source>]")

    if len(args) == 1:
        print(await dmm.get_trigger_source())
    else:
        await dmm.set_trigger_source(TriggerSource.parse(args[1]))


async def command_arm(dmm, _args):
    await dmm.trigger_arm()
