"""SPI device configuration core: parameters, handle and controller."""

from .controller import ConfigurationController
from .driver import DriverError, SpiDriver
from .errors import (
    DeviceCloseFailure,
    DeviceNotOpen,
    DeviceOpenFailure,
    HandleStateError,
    UnknownParameter,
    InvalidIdentity,
    InvalidParameterValue,
    ParameterReadFailure,
    ParameterWriteFailure,
    SpiConfigError,
)
from .handle import DeviceHandle, HandleState
from .models import DeviceIdentity, Summary
from .params import BitJustification, ParameterKind, SpiMode

__all__ = [
    "ConfigurationController",
    "DeviceHandle",
    "HandleState",
    "DeviceIdentity",
    "Summary",
    "ParameterKind",
    "SpiMode",
    "BitJustification",
    "SpiDriver",
    "DriverError",
    "SpiConfigError",
    "InvalidIdentity",
    "DeviceOpenFailure",
    "DeviceNotOpen",
    "HandleStateError",
    "UnknownParameter",
    "InvalidParameterValue",
    "ParameterReadFailure",
    "ParameterWriteFailure",
    "DeviceCloseFailure",
]
