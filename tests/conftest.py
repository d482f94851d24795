import pytest

from inode_decoder import registry
from inode_decoder.models import MODEL_LABELS

# company id 0x894C, Nav model, accel (1, -8, 0), magnetic field (16, 0, 0)
NAV_PAYLOAD = bytes(
    [0x4C, 0x89, 0x01, 0x00, 0xF8, 0xFF, 0x00, 0x00, 0x10, 0x00, 0x00, 0x00, 0x00, 0x00]
)


@pytest.fixture
def nav_payload() -> bytes:
    return NAV_PAYLOAD


@pytest.fixture(autouse=True)
def restore_model_registry():
    """
    Snapshots the module-level model registry and restores it after each test, so
    tests that register extra models stay isolated.
    """
    entries = dict(registry._entries)
    decoders = dict(registry._msd_decoders)
    labels = dict(MODEL_LABELS)
    yield
    MODEL_LABELS.clear()
    MODEL_LABELS.update(labels)
    registry._entries.clear()
    registry._entries.update(entries)
    registry._msd_decoders.clear()
    registry._msd_decoders.update(decoders)


@pytest.fixture(autouse=True)
def no_payload_logging(monkeypatch):
    monkeypatch.delenv("INODE_LOG_PAYLOADS", raising=False)
