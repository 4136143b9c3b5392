import pytest

from testeq_cli.src import psu_commands
from testeq_cli.src.errors import (
    AmbiguousCommandError,
    CommandLookupError,
    DeviceError,
    ParseError,
    UsageError,
)
from testeq_cli.mock_instruments import MockPSU


def channel(psu, index):
    return psu._channels[index]._channel


@pytest.mark.asyncio
async def test_no_args_prints_status_for_every_channel_in_order(capsys):
    psu = MockPSU()

    await psu_commands.handle_command(psu, [])

    out = capsys.readouterr().out
    names = [line for line in out.splitlines() if line.startswith("Channel ")]
    assert names == ["Channel P6V", "Channel P25V", "Channel N25V"]
    assert "  set voltage: 5.000 V" in out
    assert "  set current: 500.000 mA" in out
    assert psu.connect_calls == 1


@pytest.mark.asyncio
async def test_status_does_not_take_measurements(psu):
    await psu_commands.handle_command(psu, [])

    assert all(channel(psu, i).reads == 0 for i in range(3))


@pytest.mark.asyncio
async def test_connect_failure_aborts_before_any_handler(capsys):
    psu = MockPSU()
    psu.fail_connect = True

    with pytest.raises(DeviceError):
        await psu_commands.handle_command(psu, ["enable", "0", "on"])

    assert channel(psu, 0).enabled is False
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_abbreviated_command_is_dispatched(psu):
    await psu_commands.handle_command(psu, ["en", "1", "on"])

    assert channel(psu, 1).enabled is True


@pytest.mark.asyncio
async def test_shared_prefix_is_ambiguous(psu):
    with pytest.raises(AmbiguousCommandError) as excinfo:
        await psu_commands.handle_command(psu, ["set", "0"])

    assert excinfo.value.candidates == ["set_voltage", "set_current"]


@pytest.mark.asyncio
async def test_help_lists_power_supply_commands(psu, capsys):
    await psu_commands.handle_command(psu, ["help"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Power Supply commands:"
    assert lines[1:] == [h.help_line() for h in psu_commands.psu_commands().handlers]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "text, expected",
    [("0", False), ("off", False), ("FALSE", False), ("1", True), ("On", True), ("true", True)],
)
async def test_enable_vocabulary(psu, text, expected):
    channel(psu, 0).enabled = not expected

    await psu_commands.handle_command(psu, ["enable", "0", text])

    assert channel(psu, 0).enabled is expected


@pytest.mark.asyncio
async def test_enable_rejects_unknown_value_without_changing_state(psu):
    channel(psu, 2).enabled = True

    with pytest.raises(ParseError, match="'bogus'"):
        await psu_commands.handle_command(psu, ["enable", "2", "bogus"])

    assert channel(psu, 2).enabled is True


@pytest.mark.asyncio
async def test_enable_get_prints_state(psu, capsys):
    channel(psu, 1).enabled = True

    await psu_commands.handle_command(psu, ["enable", "1"])

    assert capsys.readouterr().out == "True\n"


@pytest.mark.asyncio
async def test_set_voltage_with_selector_only_prints_setpoint(psu, capsys):
    await psu_commands.handle_command(psu, ["set_voltage", "0"])

    assert capsys.readouterr().out == "5.000 V\n"
    assert channel(psu, 0).voltage == 5.0


@pytest.mark.asyncio
async def test_set_voltage_applies_value(psu):
    await psu_commands.handle_command(psu, ["set_voltage", "1", "3.3"])

    assert channel(psu, 1).voltage == pytest.approx(3.3)


@pytest.mark.asyncio
async def test_set_current_applies_value(psu, capsys):
    await psu_commands.handle_command(psu, ["set_current", "0", "0.25"])
    await psu_commands.handle_command(psu, ["set_current", "0"])

    assert channel(psu, 0).current == pytest.approx(0.25)
    assert capsys.readouterr().out == "250.000 mA\n"


@pytest.mark.asyncio
async def test_set_voltage_rejects_malformed_number(psu):
    with pytest.raises(ParseError, match="'5V'"):
        await psu_commands.handle_command(psu, ["set_voltage", "0", "5V"])

    assert channel(psu, 0).voltage == 5.0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "args",
    [
        ["enable"],
        ["enable", "0", "on", "extra"],
        ["set_voltage"],
        ["set_current", "0", "1", "2"],
        ["read_voltage"],
        ["read_current", "0", "1"],
        ["read_power", "0", "x"],
    ],
)
async def test_wrong_argument_count_is_usage_error(psu, args):
    with pytest.raises(UsageError, match="Usage:"):
        await psu_commands.handle_command(psu, args)


@pytest.mark.asyncio
@pytest.mark.parametrize("selector", ["3", "-1", "P6V", "1.5"])
async def test_bad_channel_selector_is_lookup_error(psu, selector):
    with pytest.raises(CommandLookupError):
        await psu_commands.handle_command(psu, ["read_voltage", selector])


@pytest.mark.asyncio
async def test_read_commands_print_readback(psu, capsys):
    channel(psu, 0).enabled = True

    await psu_commands.handle_command(psu, ["read_voltage", "0"])
    await psu_commands.handle_command(psu, ["read_current", "0"])
    await psu_commands.handle_command(psu, ["read_p", "0"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith(" V")
    assert lines[1].endswith("mA")
    assert lines[2].endswith("W")
    assert channel(psu, 0).reads == 4


@pytest.mark.asyncio
async def test_channel_guard_released_after_error(psu):
    with pytest.raises(ParseError):
        await psu_commands.handle_command(psu, ["set_current", "0", "lots"])

    assert not psu._channels[0].locked
