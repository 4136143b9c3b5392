import pyvisa
import pytest

from testeq_cli.mock_instruments import MockDMM, MockPSU


class FakeResource:
    """Stand-in for a pyvisa resource. Answers come from a dict of query -> reply."""

    def __init__(self, answers=None):
        self.answers = dict(answers or {})
        self.written: list[str] = []
        self.closed = False
        self.timeout = None
        self.read_termination = None
        self.failing_writes: set[str] = set()

    def write(self, command):
        self.written.append(command)
        if command in self.failing_writes:
            raise pyvisa.VisaIOError(pyvisa.constants.StatusCode.error_io)

    def query(self, command):
        self.written.append(command)
        if command not in self.answers:
            raise pyvisa.VisaIOError(pyvisa.constants.StatusCode.error_timeout)
        answer = self.answers[command]
        return answer() if callable(answer) else answer

    def close(self):
        self.closed = True


class FakeResourceManager:
    def __init__(self, resources):
        self.resources = resources
        self.opened: list[str] = []
        self.closed = False

    def open_resource(self, name, **kwargs):
        self.opened.append(name)
        if name not in self.resources:
            raise pyvisa.VisaIOError(pyvisa.constants.StatusCode.error_resource_not_found)
        return self.resources[name]

    def close(self):
        self.closed = True


@pytest.fixture
def psu():
    device = MockPSU()
    device.connected = True
    return device


@pytest.fixture
def dmm():
    device = MockDMM()
    device.connected = True
    return device


@pytest.fixture(autouse=True)
def _plain_env(monkeypatch):
    for name in ("TESTEQ_VISA_BACKEND", "TESTEQ_VISA_TIMEOUT", "TESTEQ_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
