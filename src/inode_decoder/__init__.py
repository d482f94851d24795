"""
inode_decoder
=============

Library for decoding iNode BLE beacon manufacturer-specific data (MSD).

This package turns the MSD payload of an iNode advertisement into a structured
record of sensor readings and alarm flags, and provides an adapter that plugs
the decoder into a host advertisement parser's per-data-type decoder table.

Functions:
    - decode / decode_msd / decode_msd_into: decode a payload known to be iNode MSD
    - wrap_msd_decoder: build a host MSD decoder that falls back to a previous one
    - register_into: install that decoder into a host decoder mapping
    - register_model_decoder: add a device model decoder at runtime
"""

from ._version import VERSION
from .decode import decode, decode_msd, decode_msd_into, new_msd_record
from .errors import BufferTooShort, MsdDecodeError, UnknownDeviceModel
from .models import MODEL_LABELS, Alarms, DeviceModel, EirDataType, INodeMsd, Vector3
from .registry import (
    MSD_DECODERS,
    get_model_decoder,
    register_into,
    register_model_decoder,
    wrap_msd_decoder,
)

__all__ = [
    "VERSION",
    "decode",
    "decode_msd",
    "decode_msd_into",
    "new_msd_record",
    "wrap_msd_decoder",
    "register_into",
    "register_model_decoder",
    "get_model_decoder",
    "MSD_DECODERS",
    "MsdDecodeError",
    "UnknownDeviceModel",
    "BufferTooShort",
    "EirDataType",
    "DeviceModel",
    "MODEL_LABELS",
    "Alarms",
    "INodeMsd",
    "Vector3",
]
