from concurrent.futures import ThreadPoolExecutor

import pytest

from inode_decoder import (
    BufferTooShort,
    DeviceModel,
    EirDataType,
    INodeMsd,
    UnknownDeviceModel,
    decode,
    decode_msd,
    decode_msd_into,
    new_msd_record,
    register_model_decoder,
)
from inode_decoder.fields import decode_accelerometer, read_uint8


def test_decode_nav_payload(nav_payload):
    msd = decode_msd(nav_payload)
    assert msd.to_dict() == {
        "type": EirDataType.MANUFACTURER_SPECIFIC_DATA,
        "typeLabel": "ManufacturerSpecificData",
        "companyIdentifier": 0x894C,
        "model": 0x89,
        "modelLabel": "iNode Nav",
        "rtto": False,
        # 0x4C has bit 0x04 set
        "alarms": {"lowBattery": True},
        "position": {"x": 0.0000625, "y": -0.0005, "z": 0.0},
        "magneticField": {"x": 0.0016, "y": 0.0, "z": 0.0},
    }


def test_decode_nav_rtto_and_battery_clear(nav_payload):
    payload = bytes([0x48]) + nav_payload[1:]
    msd = decode_msd(payload)
    assert msd.rtto is False
    assert msd.alarms.low_battery is False
    assert msd.company_identifier == 0x8948


def test_decode_nav_rtto_set(nav_payload):
    payload = bytes([0x02]) + nav_payload[1:]
    msd = decode_msd(payload)
    assert msd.rtto is True
    assert msd.alarms.low_battery is False


def test_model_matches_model_byte(nav_payload):
    msd = decode_msd(nav_payload)
    assert msd.model == nav_payload[1] == DeviceModel.NAV


def test_decode_is_idempotent(nav_payload):
    assert decode(nav_payload) == decode(nav_payload)


def test_trailing_bytes_do_not_change_fields(nav_payload):
    base = decode_msd(nav_payload).to_dict()
    for trailer in (b"\x00", b"\xff" * 8, bytes(range(32))):
        assert decode_msd(nav_payload + trailer).to_dict() == base


def test_accepts_bytearray_and_memoryview(nav_payload):
    expected = decode_msd(nav_payload)
    assert decode_msd(bytearray(nav_payload)) == expected
    assert decode_msd(memoryview(nav_payload)) == expected


def test_unknown_model_raises(nav_payload):
    payload = nav_payload[:1] + b"\xff" + nav_payload[2:]
    with pytest.raises(UnknownDeviceModel) as excinfo:
        decode(payload)
    assert excinfo.value.model == 0xFF
    assert "'255' is not a valid device model" in str(excinfo.value)


def test_unknown_model_is_a_value_error():
    with pytest.raises(ValueError):
        decode_msd(b"\x00\x00" + bytes(12))


@pytest.mark.parametrize("length", [0, 1])
def test_payload_without_model_byte_raises(length):
    with pytest.raises(BufferTooShort):
        decode_msd(bytes(length))


@pytest.mark.parametrize("length", [2, 8, 13])
def test_short_nav_payload_raises(nav_payload, length):
    with pytest.raises(BufferTooShort) as excinfo:
        decode_msd(nav_payload[:length])
    assert excinfo.value.length == length


def test_new_msd_record_header(nav_payload):
    msd = new_msd_record(nav_payload)
    assert msd.to_dict() == {
        "type": 0xFF,
        "typeLabel": "ManufacturerSpecificData",
        "companyIdentifier": 0x894C,
    }


def test_decode_into_existing_record_keeps_header(nav_payload):
    existing = INodeMsd(company_identifier=0x1234, type=0xFF)
    returned = decode(nav_payload, existing)
    assert returned is existing
    assert existing.company_identifier == 0x1234
    assert existing.type_label is None
    assert existing.model_label == "iNode Nav"
    assert existing.position.y == -0.0005


def test_decode_msd_into_leaves_record_untouched_on_short_payload(nav_payload):
    existing = INodeMsd(company_identifier=0x1234)
    before = existing.to_dict()
    with pytest.raises(BufferTooShort):
        decode_msd_into(nav_payload[:10], existing)
    assert existing.to_dict() == before


def test_decode_msd_into_leaves_record_untouched_on_decoder_failure():
    def decode_partial(buffer, msd):
        msd.model = 0x42
        decode_accelerometer(buffer, msd)
        read_uint8(buffer, 100)

    register_model_decoder(0x42, decode_partial)
    existing = INodeMsd()
    with pytest.raises(BufferTooShort):
        decode_msd_into(b"\x00\x42" + bytes(12), existing)
    assert existing.to_dict() == {}


def test_runtime_registered_model():
    def decode_test_model(buffer, msd):
        msd.model = 0x42
        msd.model_label = "Test"
        msd.rtto = bool(buffer[2])

    register_model_decoder(0x42, decode_test_model, min_length=3)
    msd = decode_msd(b"\x10\x42\x01")
    assert msd.model_label == "Test"
    assert msd.rtto is True
    with pytest.raises(BufferTooShort):
        decode_msd(b"\x10\x42")


def test_concurrent_decodes(nav_payload):
    payloads = [bytes([i]) + nav_payload[1:] for i in range(64)]
    expected = [decode_msd(p) for p in payloads]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(decode_msd, payloads))
    assert results == expected


def test_wire_shape_holds_plain_ints(nav_payload):
    data = decode_msd(nav_payload).to_dict()
    assert type(data["model"]) is int
    assert type(data["type"]) is int
    assert type(data["companyIdentifier"]) is int
