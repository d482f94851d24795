"""
inode_decoder.registry

Device model registry and the adapter that plugs it into a host advertisement
parser.

The registry maps the model byte (offset 1 of the MSD payload) to a decoder that
fills in an INodeMsd record. It is populated at import with the iNode Nav decoder;
further models can be registered at runtime, guarded by a lock. Lookups go through
the read-only MSD_DECODERS view.

Functions:
    - register_model_decoder: add or replace a model decoder
    - get_model_decoder: look up a model decoder
    - read_model: read the model byte from a payload
    - run_model_decoder: run a model decoder without exposing partial results
    - wrap_msd_decoder: build a host decoder that falls back to a previous one
    - register_into: install the wrapped decoder into a host decoder mapping
"""

import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, MutableMapping, NamedTuple, Optional

from .config import get_decoder_config
from .errors import BufferTooShort
from .fields import NAV_MIN_LENGTH, decode_nav, read_uint8
from .metrics import MSD_DECODE_ERRORS, MSD_DECODES, MSD_FALLBACK_DECODES, MSD_LOOKUP_MISSES
from .models import MODEL_LABELS, DeviceModel, EirDataType, INodeMsd

logger = logging.getLogger(__name__)

MODEL_OFFSET = 1

MsdDecoder = Callable[[bytes, INodeMsd], None]
# Host decoders take the payload and whatever record object the host builds
EirDecoder = Callable[[bytes, Any], None]


class _ModelEntry(NamedTuple):
    decoder: MsdDecoder
    min_length: int


_lock = threading.Lock()
_entries: Dict[int, _ModelEntry] = {}
_msd_decoders: Dict[int, MsdDecoder] = {}

MSD_DECODERS: Mapping[int, MsdDecoder] = MappingProxyType(_msd_decoders)


def register_model_decoder(
    model: int, decoder: MsdDecoder, label: Optional[str] = None, min_length: int = 0
) -> None:
    """
    Register (or replace) the decoder for a device model.

    ``label`` is stored in MODEL_LABELS when given. ``min_length`` is the payload
    length the decoder needs; shorter payloads are rejected with BufferTooShort
    before the decoder runs.
    """
    with _lock:
        _entries[model] = _ModelEntry(decoder, min_length)
        _msd_decoders[model] = decoder
        if label is not None:
            MODEL_LABELS[model] = label
    logger.debug(f"Registered MSD decoder for model 0x{model:02X} (min_length={min_length})")


def get_model_decoder(model: int) -> Optional[MsdDecoder]:
    entry = _get_entry(model)
    return entry.decoder if entry else None


def _get_entry(model: int) -> Optional[_ModelEntry]:
    with _lock:
        return _entries.get(model)


def read_model(buffer: bytes) -> int:
    return read_uint8(buffer, MODEL_OFFSET)


def _merge(msd: Any, decoded: INodeMsd) -> None:
    if isinstance(msd, INodeMsd):
        for name in decoded.model_fields_set:
            setattr(msd, name, getattr(decoded, name))
    elif isinstance(msd, MutableMapping):
        msd.update(decoded.to_dict())
    else:
        raise TypeError(
            f"Cannot merge iNode MSD into {type(msd).__name__}: "
            "expected an INodeMsd or a mutable mapping"
        )


def run_model_decoder(model: int, buffer: bytes, msd: Any) -> None:
    """
    Run the registered decoder for ``model`` against ``buffer`` and merge the result
    into ``msd`` (an INodeMsd or a mutable mapping).

    The decoder writes into a scratch record, so ``msd`` is only touched once every
    field decoded successfully.

    Raises:
        KeyError: if no decoder is registered for ``model``.
        BufferTooShort: if the buffer is shorter than the model needs.
    """
    entry = _get_entry(model)
    if entry is None:
        raise KeyError(model)

    if get_decoder_config()["log_payloads"]:
        logger.debug(f"Decoding MSD model 0x{model:02X}: {bytes(buffer).hex()}")

    try:
        if len(buffer) < entry.min_length:
            raise BufferTooShort(0, entry.min_length, len(buffer))
        decoded = INodeMsd()
        entry.decoder(buffer, decoded)
    except BufferTooShort as e:
        MSD_DECODE_ERRORS.labels(reason="buffer_too_short").inc()
        logger.debug(f"MSD model 0x{model:02X} payload too short: {e}")
        raise

    _merge(msd, decoded)
    MSD_DECODES.labels(model=f"0x{model:02X}").inc()


def wrap_msd_decoder(previous: Optional[EirDecoder] = None) -> EirDecoder:
    """
    Build a manufacturer-specific data decoder for a host advertisement parser.

    The returned decoder handles payloads whose model byte is registered here and
    hands everything else to ``previous`` (if given). Unknown payloads never raise:
    the host sees MSD from every vendor, not only iNode.
    """

    def decode_manufacturer_specific_data(buffer: bytes, msd: Any) -> None:
        model = buffer[MODEL_OFFSET] if len(buffer) > MODEL_OFFSET else None

        if model is not None and _get_entry(model) is not None:
            run_model_decoder(model, buffer, msd)
            return

        MSD_LOOKUP_MISSES.inc()
        if previous is not None:
            MSD_FALLBACK_DECODES.inc()
            previous(buffer, msd)

    return decode_manufacturer_specific_data


def register_into(eir_decoders: MutableMapping[int, EirDecoder]) -> None:
    """Install wrap_msd_decoder() over the host's current MSD decoder."""
    key = EirDataType.MANUFACTURER_SPECIFIC_DATA
    eir_decoders[key] = wrap_msd_decoder(eir_decoders.get(key))
    logger.info("Registered iNode MSD decoder")


register_model_decoder(DeviceModel.NAV, decode_nav, min_length=NAV_MIN_LENGTH)
