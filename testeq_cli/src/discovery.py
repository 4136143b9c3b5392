"""
Equipment resolution: turn a URI from the command line into a driver.

Supported forms:
    mock:<kind>               in-memory instrument (psu, dmm)
    visa:<resource>           any VISA resource, e.g. visa:GPIB0::5::INSTR
    <resource>                bare VISA resource string (must contain '::')

VISA resources are identified by querying *IDN? and matching the model
against MODEL_MAP, the same way a bench scan would.
"""

import asyncio

import pyvisa

from .device_manager import open_resource_manager, visa_timeout
from .errors import DeviceError
from .hp_34401a import HP_34401A
from .hp_e3631a import HP_E3631A

# Mapping of model substrings to Driver Classes
MODEL_MAP = {
    "E3631A": HP_E3631A,
    "34401A": HP_34401A,
}


def split_uri(uri):
    """Return (scheme, target) for a URI string."""
    if "::" in uri and not uri.startswith("visa:"):
        return "visa", uri
    scheme, sep, target = uri.partition(":")
    if not sep or not target:
        raise DeviceError(f"Invalid equipment URI '{uri}', expected <scheme>:<target>")
    return scheme.lower(), target


def driver_for_idn(idn):
    for model_key, driver_class in MODEL_MAP.items():
        if model_key in idn:
            return driver_class
    raise DeviceError(f"Unsupported instrument model: {idn}")


def _identify(rm, resource):
    inst = rm.open_resource(resource, timeout=visa_timeout())
    try:
        inst.read_termination = "\n"
        return inst.query("*IDN?").strip()
    finally:
        inst.close()


async def equipment_from_uri(uri):
    """
    Build (but do not connect) the equipment object for a URI.

    Raises:
        DeviceError: unknown scheme, unreachable resource, or unknown model.
    """
    scheme, target = split_uri(uri)

    if scheme == "mock":
        from ..mock_instruments import get_mock_device

        return get_mock_device(target.lower())

    if scheme != "visa":
        raise DeviceError(f"Unsupported URI scheme '{scheme}'")

    rm = open_resource_manager()
    try:
        idn = await asyncio.to_thread(_identify, rm, target)
        if not idn:
            raise DeviceError(f"No response from {target}")
        driver_class = driver_for_idn(idn)
    except pyvisa.errors.Error as e:
        rm.close()
        raise DeviceError(f"No response from {target}: {e}") from e
    except DeviceError:
        rm.close()
        raise
    return driver_class(target, rm)
