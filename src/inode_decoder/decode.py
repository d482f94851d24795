"""
inode_decoder.decode

Direct entry points for decoding iNode manufacturer-specific data payloads.

Unlike the host adapter in inode_decoder.registry, these functions are for callers
that already know the payload is iNode MSD, so an unregistered model byte raises
UnknownDeviceModel.

Functions:
    - new_msd_record: build the record header (type, type label, company identifier)
    - decode_msd: decode into a fresh record
    - decode_msd_into: decode into a caller-supplied record
    - decode: decode_msd or decode_msd_into, depending on whether a record is given
"""

import logging
from typing import Optional

from .errors import BufferTooShort, UnknownDeviceModel
from .fields import read_uint16_le
from .metrics import MSD_DECODE_ERRORS
from .models import EirDataType, INodeMsd
from .registry import get_model_decoder, read_model, run_model_decoder

logger = logging.getLogger(__name__)


def _lookup_model(buffer: bytes) -> int:
    try:
        model = read_model(buffer)
    except BufferTooShort as e:
        MSD_DECODE_ERRORS.labels(reason="buffer_too_short").inc()
        logger.debug(f"iNode MSD payload has no device model byte: {e}")
        raise
    if get_model_decoder(model) is None:
        MSD_DECODE_ERRORS.labels(reason="unknown_model").inc()
        logger.debug(f"No iNode MSD decoder for device model 0x{model:02X}")
        raise UnknownDeviceModel(model)
    return model


def new_msd_record(buffer: bytes) -> INodeMsd:
    msd_type = EirDataType.MANUFACTURER_SPECIFIC_DATA
    return INodeMsd(
        type=int(msd_type),
        type_label=msd_type.label,
        company_identifier=read_uint16_le(buffer, 0),
    )


def decode_msd(buffer: bytes) -> INodeMsd:
    """
    Decode an iNode MSD payload into a new record.

    Raises:
        UnknownDeviceModel: if byte 1 is not a registered device model.
        BufferTooShort: if the payload is shorter than the model needs.
    """
    model = _lookup_model(buffer)
    msd = new_msd_record(buffer)
    run_model_decoder(model, buffer, msd)
    return msd


def decode_msd_into(buffer: bytes, msd: INodeMsd) -> INodeMsd:
    """
    Decode an iNode MSD payload into an existing record and return it.

    Only model-specific fields are written; the header fields of ``msd`` are left as
    they are. On error ``msd`` is not modified.
    """
    model = _lookup_model(buffer)
    run_model_decoder(model, buffer, msd)
    return msd


def decode(buffer: bytes, msd: Optional[INodeMsd] = None) -> INodeMsd:
    if msd is None:
        return decode_msd(buffer)
    return decode_msd_into(buffer, msd)
