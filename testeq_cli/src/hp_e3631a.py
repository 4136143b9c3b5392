# HP E3631A
"""
Driver for the HP E3631A Power Supply Unit (PSU).
Instrument Type: Triple output DC Power Supply

Channels are exposed in front panel order:
    0 -> P6V  (+6V, 5A)
    1 -> P25V (+25V, 1A)
    2 -> N25V (-25V, 1A)

The output enable is a single switch for all three outputs, so enabling or
disabling any channel changes the state reported by every channel.
"""

from .device_manager import DeviceManager
from .equipment import LockedChannel, PowerSupplyChannel, PowerSupplyEquipment
from .errors import DeviceError


class HP_E3631A_Channel(PowerSupplyChannel):
    def __init__(self, psu, scpi_name):
        self.psu = psu
        self.scpi_name = scpi_name

    def name(self):
        return self.scpi_name

    async def _select_and_query(self, command):
        async with self.psu.bus:
            await self.psu.send_command(f"INSTrument:SELect {self.scpi_name}")
            return await self.psu.query_float(command)

    async def _select_and_send(self, command):
        async with self.psu.bus:
            await self.psu.send_command(f"INSTrument:SELect {self.scpi_name}")
            await self.psu.send_command(command)

    async def get_enabled(self):
        answer = await self.psu.query("OUTPut:STATe?")
        if answer in ("1", "ON"):
            return True
        if answer in ("0", "OFF"):
            return False
        raise DeviceError(f"Unexpected output state '{answer}'")

    async def set_enabled(self, enabled):
        state = "ON" if enabled else "OFF"
        await self.psu.send_command(f"OUTPut:STATe {state}")

    async def get_voltage(self):
        return await self._select_and_query("VOLTage?")

    async def set_voltage(self, voltage):
        await self._select_and_send(f"VOLTage {voltage}")

    async def get_current(self):
        return await self._select_and_query("CURRent?")

    async def set_current(self, current):
        await self._select_and_send(f"CURRent {current}")

    async def read_voltage(self):
        return await self.psu.query_float(f"MEASure:VOLTage? {self.scpi_name}")

    async def read_current(self):
        return await self.psu.query_float(f"MEASure:CURRent? {self.scpi_name}")


class HP_E3631A(DeviceManager, PowerSupplyEquipment):
    # Output Channels, in front panel order
    CHANNELS = ("P6V", "P25V", "N25V")

    def __init__(self, resource_name, rm=None):
        """Initialize the HP E3631A PSU."""
        super().__init__(resource_name, rm)
        self._channels = [
            LockedChannel(HP_E3631A_Channel(self, scpi_name))
            for scpi_name in self.CHANNELS
        ]

    async def on_connect(self):
        await self.clear_status()

    async def get_channels(self):
        return list(self._channels)

