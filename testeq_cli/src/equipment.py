"""
Device capability interface consumed by the command modules.

A device exposes an ordered list of channels. Each channel is handed out as a
LockedChannel: the same reference is shared by everyone holding it, and
`async with ref as chan:` grants exclusive use of the channel until the block
exits, on success or on error.
"""

import asyncio
import math
from enum import Enum
from typing import List, Optional

from .errors import CommandLookupError, ParseError


class Unit(Enum):
    VOLTAGE = "V"
    CURRENT = "A"
    POWER = "W"
    RESISTANCE = "Ohm"
    FREQUENCY = "Hz"
    PERIOD = "s"


_SI_PREFIXES = [
    (1e9, "G"),
    (1e6, "M"),
    (1e3, "k"),
    (1.0, ""),
    (1e-3, "m"),
    (1e-6, "u"),
    (1e-9, "n"),
]


class Reading:
    """A measured or configured value together with its unit."""

    def __init__(self, unit: Unit, value: float):
        self.unit = unit
        self.value = float(value)

    def __eq__(self, other):
        if not isinstance(other, Reading):
            return NotImplemented
        return self.unit == other.unit and self.value == other.value

    def __repr__(self):
        return f"Reading({self.unit.name}, {self.value!r})"

    def __str__(self):
        value = self.value
        if math.isnan(value) or math.isinf(value):
            return f"{value} {self.unit.value}"
        magnitude = abs(value)
        if magnitude == 0:
            return f"{0.0:.3f} {self.unit.value}"
        for scale, prefix in _SI_PREFIXES:
            if magnitude >= scale:
                return f"{value / scale:.3f} {prefix}{self.unit.value}"
        scale, prefix = _SI_PREFIXES[-1]
        return f"{value / scale:.3f} {prefix}{self.unit.value}"


class DmmMode(Enum):
    DC_VOLTAGE = "dc_voltage"
    AC_VOLTAGE = "ac_voltage"
    DC_CURRENT = "dc_current"
    AC_CURRENT = "ac_current"
    RESISTANCE_2WIRE = "resistance_2wire"
    RESISTANCE_4WIRE = "resistance_4wire"
    FREQUENCY = "frequency"
    PERIOD = "period"
    CONTINUITY = "continuity"
    DIODE = "diode"

    @classmethod
    def parse(cls, text: str) -> "DmmMode":
        key = text.strip().lower()
        key = DMM_MODE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise ParseError(f"Invalid mode '{text}'. Valid: {valid}") from None

    @property
    def unit(self) -> Unit:
        return _MODE_UNITS[self]

    def __str__(self):
        return self.value


DMM_MODE_ALIASES = {
    "vdc": "dc_voltage",
    "vac": "ac_voltage",
    "idc": "dc_current",
    "iac": "ac_current",
    "res": "resistance_2wire",
    "fres": "resistance_4wire",
    "freq": "frequency",
    "per": "period",
    "cont": "continuity",
}

_MODE_UNITS = {
    DmmMode.DC_VOLTAGE: Unit.VOLTAGE,
    DmmMode.AC_VOLTAGE: Unit.VOLTAGE,
    DmmMode.DC_CURRENT: Unit.CURRENT,
    DmmMode.AC_CURRENT: Unit.CURRENT,
    DmmMode.RESISTANCE_2WIRE: Unit.RESISTANCE,
    DmmMode.RESISTANCE_4WIRE: Unit.RESISTANCE,
    DmmMode.FREQUENCY: Unit.FREQUENCY,
    DmmMode.PERIOD: Unit.PERIOD,
    DmmMode.CONTINUITY: Unit.RESISTANCE,
    DmmMode.DIODE: Unit.VOLTAGE,
}


class TriggerSource(Enum):
    IMMEDIATE = "immediate"
    BUS = "bus"
    EXTERNAL = "external"

    @classmethod
    def parse(cls, text: str) -> "TriggerSource":
        key = text.strip().lower()
        key = TRIGGER_SOURCE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(source.value for source in cls)
            raise ParseError(
                f"Invalid trigger source '{text}'. Valid: {valid}"
            ) from None

    def __str__(self):
        return self.value


TRIGGER_SOURCE_ALIASES = {
    "imm": "immediate",
    "ext": "external",
}


class LockedChannel:
    """Shared, lock-guarded reference to one channel."""

    def __init__(self, channel):
        self._channel = channel
        self._lock = asyncio.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    async def __aenter__(self):
        await self._lock.acquire()
        return self._channel

    async def __aexit__(self, exc_type, exc_value, traceback):
        self._lock.release()


class BaseEquipment:
    """Common surface of every instrument kind."""

    async def connect(self):
        """Open the connection. Calling it again while connected is a no-op."""
        raise NotImplementedError

    async def disconnect(self):
        pass

    async def get_channels(self) -> List[LockedChannel]:
        raise NotImplementedError

    async def get_channel(self, index: int) -> LockedChannel:
        channels = await self.get_channels()
        if index < 0 or index >= len(channels):
            raise CommandLookupError(
                f"No channel {index}, device has {len(channels)} channel(s)"
            )
        return channels[index]


class PowerSupplyChannel:
    def name(self) -> str:
        raise NotImplementedError

    async def get_enabled(self) -> bool:
        raise NotImplementedError

    async def set_enabled(self, enabled: bool):
        raise NotImplementedError

    async def get_voltage(self) -> float:
        raise NotImplementedError

    async def set_voltage(self, voltage: float):
        raise NotImplementedError

    async def get_current(self) -> float:
        raise NotImplementedError

    async def set_current(self, current: float):
        raise NotImplementedError

    async def read_voltage(self) -> float:
        raise NotImplementedError

    async def read_current(self) -> float:
        raise NotImplementedError

    async def read_power(self) -> float:
        voltage = await self.read_voltage()
        current = await self.read_current()
        return voltage * current


class PowerSupplyEquipment(BaseEquipment):
    pass


class MultimeterChannel:
    def name(self) -> str:
        raise NotImplementedError

    async def get_mode(self) -> DmmMode:
        raise NotImplementedError

    async def set_mode(self, mode: DmmMode, options: Optional[dict] = None):
        raise NotImplementedError

    async def get_reading(self) -> Reading:
        raise NotImplementedError


class MultimeterEquipment(BaseEquipment):
    async def get_trigger_source(self) -> TriggerSource:
        raise NotImplementedError

    async def set_trigger_source(self, source: TriggerSource):
        raise NotImplementedError

    async def trigger_arm(self):
        raise NotImplementedError

    async def trigger_now(self):
        raise NotImplementedError


async def resolve_channel(device, selector: str) -> LockedChannel:
    """Look up a channel from a command line selector (numeric index)."""
    # TODO: also accept channel names as reported by name()
    try:
        index = int(selector)
    except ValueError:
        raise CommandLookupError(f"Invalid channel '{selector}'") from None
    return await device.get_channel(index)
