"""
inode_decoder.fields

Field-level decoders for iNode manufacturer-specific data.

Each decoder reads a fixed byte range of the MSD payload and writes exactly one
field of the INodeMsd record. Decoders never read fields written by other decoders,
so their order within a model pipeline does not matter.

Functions:
    - read_uint8 / read_int16_le / read_uint16_le: bounds-checked little-endian reads
    - decode_accelerometer: position (int16 / 16000)
    - decode_magnetic_field: magnetic_field (int16 / 10000)
    - decode_rtto: real-time trusted offset flag
    - decode_alarms: low battery flag plus optional extended alarm word
    - decode_nav: the full pipeline for the iNode Nav model
"""

from typing import Optional

from .errors import BufferTooShort
from .models import MODEL_LABELS, Alarms, DeviceModel, INodeMsd, Vector3

ACCELEROMETER_SCALE = 16000
MAGNETIC_FIELD_SCALE = 10000

RTTO_BIT = 0x02
LOW_BATTERY_BIT = 0x8000

# Bit 0x01 upwards of the extended alarm word, in order
EXTENDED_ALARM_FLAGS = (
    "move_accelerometer",
    "level_accelerometer",
    "level_temperature",
    "level_humidity",
    "contact_change",
    "move_stopped",
    "move_g_timer",
    "level_accelerometer_change",
    "level_magnet_change",
    "level_magnet_timer",
)

# Highest offset read by the Nav pipeline is the int16 at 12
NAV_MIN_LENGTH = 14


def _check_bounds(buffer: bytes, offset: int, width: int) -> None:
    if offset < 0 or offset + width > len(buffer):
        raise BufferTooShort(offset, width, len(buffer))


def read_uint8(buffer: bytes, offset: int) -> int:
    _check_bounds(buffer, offset, 1)
    return buffer[offset]


def read_int16_le(buffer: bytes, offset: int) -> int:
    _check_bounds(buffer, offset, 2)
    return int.from_bytes(buffer[offset : offset + 2], byteorder="little", signed=True)


def read_uint16_le(buffer: bytes, offset: int) -> int:
    _check_bounds(buffer, offset, 2)
    return int.from_bytes(buffer[offset : offset + 2], byteorder="little", signed=False)


def _read_vector(buffer: bytes, offset: int, scale: int) -> Vector3:
    return Vector3(
        x=read_int16_le(buffer, offset) / scale,
        y=read_int16_le(buffer, offset + 2) / scale,
        z=read_int16_le(buffer, offset + 4) / scale,
    )


def decode_accelerometer(buffer: bytes, msd: INodeMsd) -> None:
    msd.position = _read_vector(buffer, 2, ACCELEROMETER_SCALE)


def decode_magnetic_field(buffer: bytes, msd: INodeMsd) -> None:
    msd.magnetic_field = _read_vector(buffer, 8, MAGNETIC_FIELD_SCALE)


def decode_rtto(buffer: bytes, offset: int, msd: INodeMsd) -> None:
    msd.rtto = bool(read_uint8(buffer, offset) & RTTO_BIT)


def decode_alarms(
    buffer: bytes,
    battery_offset: Optional[int],
    extended_offset: Optional[int],
    msd: INodeMsd,
) -> None:
    """
    Decode the alarm flags into ``msd.alarms``.

    The battery byte is shifted left by 13 and masked with 0x8000, so only its bit
    0x04 can ever reach the low battery flag. The extended word, when present, is a
    uint16 whose low ten bits map to EXTENDED_ALARM_FLAGS. Without an extended
    offset only ``low_battery`` is set.
    """
    battery = 0
    if battery_offset is not None:
        battery = (read_uint8(buffer, battery_offset) << 13) & LOW_BATTERY_BIT
    extended = 0
    if extended_offset is not None:
        extended = read_uint16_le(buffer, extended_offset)
    mask = extended | battery

    alarms = Alarms(low_battery=bool(mask & LOW_BATTERY_BIT))
    if extended_offset is not None:
        for bit, name in enumerate(EXTENDED_ALARM_FLAGS):
            setattr(alarms, name, bool(mask & (1 << bit)))

    msd.alarms = alarms


def decode_nav(buffer: bytes, msd: INodeMsd) -> None:
    msd.model = int(DeviceModel.NAV)
    msd.model_label = MODEL_LABELS[DeviceModel.NAV]

    decode_accelerometer(buffer, msd)
    decode_magnetic_field(buffer, msd)
    decode_rtto(buffer, 0, msd)
    decode_alarms(buffer, 0, None, msd)
