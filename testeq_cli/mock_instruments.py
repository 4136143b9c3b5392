"""
Mock instruments for exercising the CLI without physical hardware.

Usage:
    testeq-cli mock:psu status
    testeq-cli mock:dmm read_now 0
"""

import random

from .src.equipment import (
    BaseEquipment,
    DmmMode,
    LockedChannel,
    MultimeterChannel,
    MultimeterEquipment,
    PowerSupplyChannel,
    PowerSupplyEquipment,
    Reading,
    TriggerSource,
)
from .src.errors import DeviceError


class MockBase(BaseEquipment):
    def __init__(self, channels):
        self.connected = False
        self.connect_calls = 0
        self.fail_connect = False
        self._channels = [LockedChannel(chan) for chan in channels]

    async def connect(self):
        if self.fail_connect:
            raise DeviceError("Mock connection refused")
        self.connect_calls += 1
        self.connected = True

    async def disconnect(self):
        self.connected = False

    async def get_channels(self):
        if not self.connected:
            raise DeviceError("Instrument not connected.")
        return list(self._channels)


class MockPSUChannel(PowerSupplyChannel):
    def __init__(self, name, voltage=0.0, current=0.1):
        self._name = name
        self.enabled = False
        self.voltage = voltage
        self.current = current
        self.reads = 0

    def name(self):
        return self._name

    async def get_enabled(self):
        return self.enabled

    async def set_enabled(self, enabled):
        self.enabled = enabled

    async def get_voltage(self):
        return self.voltage

    async def set_voltage(self, voltage):
        self.voltage = voltage

    async def get_current(self):
        return self.current

    async def set_current(self, current):
        self.current = current

    async def read_voltage(self):
        self.reads += 1
        if not self.enabled:
            return 0.0
        return round(self.voltage * random.uniform(0.999, 1.001), 6)

    async def read_current(self):
        self.reads += 1
        if not self.enabled:
            return 0.0
        return round(self.current * random.uniform(0.1, 0.2), 6)


class MockPSU(MockBase, PowerSupplyEquipment):
    def __init__(self):
        super().__init__(
            [
                MockPSUChannel("P6V", voltage=5.0, current=1.0),
                MockPSUChannel("P25V", voltage=12.0, current=0.5),
                MockPSUChannel("N25V", voltage=-12.0, current=0.5),
            ]
        )


class MockDMMChannel(MultimeterChannel):
    def __init__(self, dmm, name):
        self.dmm = dmm
        self._name = name
        self.mode = DmmMode.DC_VOLTAGE
        self.options = None
        self.reads = 0

    def name(self):
        return self._name

    async def get_mode(self):
        return self.mode

    async def set_mode(self, mode, options=None):
        self.mode = mode
        self.options = options

    async def get_reading(self):
        self.reads += 1
        self.dmm.events.append(("read", self._name))
        self.dmm.armed = False
        return Reading(self.mode.unit, round(random.uniform(4.9980, 5.0020), 6))


class MockDMM(MockBase, MultimeterEquipment):
    def __init__(self):
        self.trigger_source = TriggerSource.IMMEDIATE
        self.armed = False
        self.events = []
        super().__init__([MockDMMChannel(self, "DMM")])

    async def get_trigger_source(self):
        return self.trigger_source

    async def set_trigger_source(self, source):
        self.trigger_source = source

    async def trigger_arm(self):
        self.events.append(("arm",))
        self.armed = True

    async def trigger_now(self):
        if not self.armed:
            raise DeviceError("Trigger ignored, DMM not armed")
        self.events.append(("trigger",))


class MockEquipment(MockBase):
    """Equipment of a kind the command modules do not handle."""

    def __init__(self):
        super().__init__([])


MOCK_DEVICES = {
    "psu": MockPSU,
    "dmm": MockDMM,
}


def get_mock_device(kind):
    return MOCK_DEVICES.get(kind, MockEquipment)()
