"""
Exceptions raised while decoding iNode manufacturer-specific data.
"""


class MsdDecodeError(ValueError):
    """Base class for all iNode MSD decoding failures."""


class UnknownDeviceModel(MsdDecodeError):
    """The model byte of the buffer has no registered decoder."""

    def __init__(self, model: int):
        self.model = model
        super().__init__(f"Cannot decode iNode MSD: '{model}' is not a valid device model!")


class BufferTooShort(MsdDecodeError):
    """A field read would run past the end of the buffer."""

    def __init__(self, offset: int, width: int, length: int):
        self.offset = offset
        self.width = width
        self.length = length
        super().__init__(
            f"Cannot decode iNode MSD: reading {width} byte(s) at offset {offset} "
            f"requires {offset + width} bytes, buffer has {length}"
        )
