import asyncio

import pytest

from testeq_cli import cli
from testeq_cli.mock_instruments import MockPSU
from testeq_cli.src import discovery


def test_missing_uri_is_usage_error(capsys):
    assert cli.main([]) == 1
    assert "Usage: testeq-cli <uri>" in capsys.readouterr().err


def test_bare_uri_prints_status(capsys):
    assert cli.main(["mock:psu"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("Channel P6V\n")
    assert "Channel N25V" in out


def test_help_for_multimeter(capsys):
    assert cli.main(["mock:dmm", "help"]) == 0

    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Multimeter commands:"
    assert "  read_now <chan>: Trigger DMM and get reading from channel" in out


def test_ambiguous_command_exits_nonzero(capsys):
    assert cli.main(["mock:psu", "read", "0"]) == 1

    err = capsys.readouterr().err
    assert "Ambiguous command 'read'" in err
    for name in ("read_voltage", "read_current", "read_power"):
        assert name in err


def test_unknown_command_exits_nonzero(capsys):
    assert cli.main(["mock:psu", "reboot"]) == 1
    assert "No command matching 'reboot'" in capsys.readouterr().err


def test_unsupported_equipment_type(capsys):
    assert cli.main(["mock:scope"]) == 1
    assert "Unsupported equipment type" in capsys.readouterr().err


def test_device_error_is_reported(capsys):
    assert cli.main(["nonsense"]) == 1
    assert "Invalid equipment URI" in capsys.readouterr().err


def test_device_disconnected_after_failed_command(monkeypatch):
    psu = MockPSU()

    async def fake_from_uri(uri):
        return psu

    monkeypatch.setattr(cli, "equipment_from_uri", fake_from_uri)

    assert cli.main(["mock:psu", "set_voltage", "0", "high"]) == 1
    assert psu.connect_calls == 1
    assert psu.connected is False


def test_mock_scheme_builds_fresh_devices():
    first = asyncio.run(discovery.equipment_from_uri("mock:psu"))
    second = asyncio.run(discovery.equipment_from_uri("mock:psu"))

    assert first is not second


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["mock:psu", "set_voltage", "1"], "12.000 V\n"),
        (["mock:psu", "set_c", "2"], "500.000 mA\n"),
        (["mock:dmm", "trig_source"], "immediate\n"),
        (["mock:dmm", "mo", "0"], "dc_voltage\n"),
    ],
)
def test_get_commands_print_value(argv, expected, capsys):
    assert cli.main(argv) == 0
    assert capsys.readouterr().out == expected
