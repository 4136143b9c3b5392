# HP 34401A
"""
Driver for HP/Agilent 34401A Digital Multimeter.
Instrument Type: Digital Multimeter (DMM)

The meter has a single measurement input, exposed as channel 0 ("DMM").

Command Syntax Conventions (from HP 34401A Programming Reference):
    Square Brackets [ ]: Indicate optional keywords or parameters.
    Braces { }: Enclose parameters within a command string.
    Triangle Brackets < >: Indicate that you must substitute a value for the enclosed parameter.
    Vertical Bar |: Separates one of two or more alternative parameters.
"""

from .device_manager import DeviceManager
from .equipment import (
    DmmMode,
    LockedChannel,
    MultimeterChannel,
    MultimeterEquipment,
    Reading,
    TriggerSource,
)
from .errors import DeviceError

# CONFigure function for each mode
_MODE_FUNCTIONS = {
    DmmMode.DC_VOLTAGE: "VOLTage:DC",
    DmmMode.AC_VOLTAGE: "VOLTage:AC",
    DmmMode.DC_CURRENT: "CURRent:DC",
    DmmMode.AC_CURRENT: "CURRent:AC",
    DmmMode.RESISTANCE_2WIRE: "RESistance",
    DmmMode.RESISTANCE_4WIRE: "FRESistance",
    DmmMode.FREQUENCY: "FREQuency",
    DmmMode.PERIOD: "PERiod",
    DmmMode.CONTINUITY: "CONTinuity",
    DmmMode.DIODE: "DIODe",
}

# Short form answers to FUNCtion?
_FUNCTION_MODES = {
    "VOLT": DmmMode.DC_VOLTAGE,
    "VOLT:DC": DmmMode.DC_VOLTAGE,
    "VOLT:AC": DmmMode.AC_VOLTAGE,
    "CURR": DmmMode.DC_CURRENT,
    "CURR:DC": DmmMode.DC_CURRENT,
    "CURR:AC": DmmMode.AC_CURRENT,
    "RES": DmmMode.RESISTANCE_2WIRE,
    "FRES": DmmMode.RESISTANCE_4WIRE,
    "FREQ": DmmMode.FREQUENCY,
    "PER": DmmMode.PERIOD,
    "CONT": DmmMode.CONTINUITY,
    "DIOD": DmmMode.DIODE,
}

# Modes that do NOT accept range/resolution parameters
_NO_PARAM_MODES = {DmmMode.CONTINUITY, DmmMode.DIODE}

_TRIGGER_SOURCES = {
    TriggerSource.IMMEDIATE: "IMMediate",
    TriggerSource.BUS: "BUS",
    TriggerSource.EXTERNAL: "EXTernal",
}

_SOURCE_ANSWERS = {
    "IMM": TriggerSource.IMMEDIATE,
    "BUS": TriggerSource.BUS,
    "EXT": TriggerSource.EXTERNAL,
}


class HP_34401A_Channel(MultimeterChannel):
    def __init__(self, dmm):
        self.dmm = dmm

    def name(self):
        return "DMM"

    async def get_mode(self):
        answer = await self.dmm.query("FUNCtion?")
        key = answer.strip().strip('"').upper()
        try:
            return _FUNCTION_MODES[key]
        except KeyError:
            raise DeviceError(f"Unexpected measurement function '{answer}'") from None

    async def set_mode(self, mode, options=None):
        """
        Configure the measurement function.

        Args:
            mode (DmmMode): Measurement function.
            options (dict, optional): 'range' and 'resolution', each a number
                or MIN, MAX, DEF, AUTO. Ignored for continuity and diode.
        """
        function = _MODE_FUNCTIONS[mode]
        options = options or {}
        if mode in _NO_PARAM_MODES:
            await self.dmm.send_command(f"CONFigure:{function}")
        else:
            range_val = options.get("range", "DEF")
            resolution = options.get("resolution", "DEF")
            await self.dmm.send_command(f"CONFigure:{function} {range_val},{resolution}")
        self.dmm.armed = False

    async def get_reading(self):
        mode = await self.get_mode()
        if self.dmm.armed:
            # Triggered measurement is waiting in reading memory
            self.dmm.armed = False
            value = await self.dmm.query_float("FETCh?")
        else:
            value = await self.dmm.query_float("READ?")
        return Reading(mode.unit, value)


class HP_34401A(DeviceManager, MultimeterEquipment):
    """
    Driver for HP/Agilent 34401A Digital Multimeter.

    Based on HP 34401A User's Guide (34401-90004).
    """

    def __init__(self, resource_name, rm=None):
        """Initialize the HP 34401A DMM."""
        super().__init__(resource_name, rm)
        self.armed = False
        self._channels = [LockedChannel(HP_34401A_Channel(self))]

    async def on_connect(self):
        await self.clear_status()

    async def get_channels(self):
        return list(self._channels)

    # ==========================================
    # TRIGGER CONFIGURATION
    # ==========================================

    async def get_trigger_source(self):
        answer = (await self.query("TRIGger:SOURce?")).upper()
        try:
            return _SOURCE_ANSWERS[answer[:3]]
        except KeyError:
            raise DeviceError(f"Unexpected trigger source '{answer}'") from None

    async def set_trigger_source(self, source):
        """
        Sets the trigger source.

        IMMediate triggers as soon as the meter is armed, BUS waits for *TRG,
        EXTernal waits for the rear panel trigger input.
        """
        await self.send_command(f"TRIGger:SOURce {_TRIGGER_SOURCES[source]}")

    async def trigger_arm(self):
        """Changes the DMM from idle to wait-for-trigger state."""
        await self.send_command("INITiate")
        self.armed = True

    async def trigger_now(self):
        """Sends a software trigger. Only BUS triggering accepts one."""
        if await self.get_trigger_source() == TriggerSource.BUS:
            await self.send_command("*TRG")
