import asyncio
import os

import pyvisa

from .errors import DeviceError, UsageError
from .terminal import ColorPrinter

DEFAULT_TIMEOUT_MS = 5000


def visa_backend():
    """VISA library selection, e.g. '@py' for pyvisa-py. Empty means default."""
    return os.environ.get("TESTEQ_VISA_BACKEND", "")


def visa_timeout():
    raw = os.environ.get("TESTEQ_VISA_TIMEOUT")
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_MS
    try:
        timeout = int(raw)
    except ValueError:
        raise UsageError(f"TESTEQ_VISA_TIMEOUT must be an integer, got '{raw}'") from None
    if timeout <= 0:
        raise UsageError(f"TESTEQ_VISA_TIMEOUT must be positive, got {timeout}")
    return timeout


def verbose_enabled():
    return os.environ.get("TESTEQ_VERBOSE", "").strip().lower() in ("1", "on", "true")


def open_resource_manager():
    try:
        return pyvisa.ResourceManager(visa_backend())
    except (OSError, ValueError) as e:
        raise DeviceError(f"Failed to load VISA library: {e}") from e


class DeviceManager:
    """
    Base class for SCPI instrument management using PyVISA.

    pyvisa is blocking, so every bus call runs in a worker thread. `bus` is an
    asyncio lock that callers hold across multi-message sequences (select a
    channel, then query it) so sequences from different channels of the same
    instrument never interleave on the wire.
    """

    def __init__(self, resource_name, rm=None):
        self.rm = rm
        self.resource_name = resource_name
        self.instrument = None
        self.bus = asyncio.Lock()
        self.verbose = verbose_enabled()

    @property
    def connected(self):
        return self.instrument is not None

    def _open(self):
        if self.rm is None:
            self.rm = open_resource_manager()
        instrument = self.rm.open_resource(self.resource_name)
        instrument.timeout = visa_timeout()
        instrument.read_termination = "\n"
        return instrument

    async def connect(self):
        """Connects to the instrument. Does nothing if already connected."""
        if self.connected:
            return
        try:
            self.instrument = await asyncio.to_thread(self._open)
        except pyvisa.errors.Error as e:
            raise DeviceError(f"Failed to connect to {self.resource_name}: {e}") from e
        if self.verbose:
            ColorPrinter.debug(f"Connected to {self.resource_name}")
        try:
            await self.on_connect()
        except Exception:
            instrument, self.instrument = self.instrument, None
            await asyncio.to_thread(instrument.close)
            raise

    async def on_connect(self):
        """Hook for drivers that need to prepare the instrument after opening it."""

    async def disconnect(self):
        """Disconnects from the instrument."""
        if self.instrument:
            instrument, self.instrument = self.instrument, None
            await asyncio.to_thread(instrument.close)
            if self.verbose:
                ColorPrinter.debug(f"Disconnected from {self.resource_name}")

    def _require_instrument(self):
        if self.instrument is None:
            raise DeviceError("Instrument not connected.")
        return self.instrument

    async def send_command(self, command):
        """Sends a command to the instrument without waiting for a response."""
        instrument = self._require_instrument()
        try:
            await asyncio.to_thread(instrument.write, command)
        except pyvisa.VisaIOError as e:
            raise DeviceError(f"Failed to send '{command}': {e}") from e
        if self.verbose:
            ColorPrinter.debug(f"Sent command: {command}")

    async def query(self, command):
        """Sends a command and returns the response."""
        instrument = self._require_instrument()
        try:
            response = await asyncio.to_thread(instrument.query, command)
        except pyvisa.VisaIOError as e:
            raise DeviceError(f"Query '{command}' failed: {e}") from e
        if self.verbose:
            ColorPrinter.debug(f"Query {command} -> {response.strip()}")
        return response.strip()

    async def query_float(self, command):
        """Query a single numeric value, ignoring trailing units or whitespace."""
        response = await self.query(command)
        try:
            # Multiple samples come back comma separated, average them
            if "," in response:
                values = [float(val.strip()) for val in response.split(",")]
                return sum(values) / len(values)
            return float(response.split()[0])
        except (ValueError, IndexError) as e:
            raise DeviceError(
                f"Failed to convert response '{response}' to float: {e}"
            ) from e

    async def clear_status(self):
        """Clears the instrument status byte."""
        await self.send_command("*CLS")

