"""
Defines the enums and Pydantic models that make up a decoded iNode MSD record.

Field names are snake_case in Python and camelCase on the wire; dump with
``model_dump(by_alias=True, exclude_none=True)`` to get the record exactly as the
host advertisement parser represents it.

Models:
    - Vector3: x/y/z triple of scaled fixed-point readings
    - Alarms: low battery flag plus the optional extended alarm flags
    - INodeMsd: the decoded manufacturer-specific data record
"""

from enum import IntEnum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EirDataType(IntEnum):
    """Advertisement (EIR/AD) data type tags the host keys its decoders by."""

    FLAGS = 0x01
    INCOMPLETE_LIST_16_BIT_SERVICE_UUIDS = 0x02
    COMPLETE_LIST_16_BIT_SERVICE_UUIDS = 0x03
    INCOMPLETE_LIST_128_BIT_SERVICE_UUIDS = 0x06
    COMPLETE_LIST_128_BIT_SERVICE_UUIDS = 0x07
    SHORTENED_LOCAL_NAME = 0x08
    COMPLETE_LOCAL_NAME = 0x09
    TX_POWER_LEVEL = 0x0A
    SERVICE_DATA_16_BIT_UUID = 0x16
    MANUFACTURER_SPECIFIC_DATA = 0xFF

    @property
    def label(self) -> str:
        # PascalCase, as the host parser names its data types
        return "".join(part.capitalize() for part in self.name.split("_"))


class DeviceModel(IntEnum):
    """iNode device model identifiers (byte 1 of the MSD payload)."""

    NAV = 0x89


MODEL_LABELS: Dict[int, str] = {
    DeviceModel.NAV: "iNode Nav",
}


class _MsdBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())


class Vector3(_MsdBase):
    """Three-axis reading (acceleration or magnetic field)."""

    x: float
    y: float
    z: float


class Alarms(_MsdBase):
    """
    Alarm flags decoded from the combined 16-bit alarm mask.

    ``low_battery`` is always decoded. The remaining flags are only present when the
    payload carries an extended alarm word; otherwise they stay None and are left out
    of the dumped record.
    """

    low_battery: bool = Field(False, alias="lowBattery")
    move_accelerometer: Optional[bool] = Field(None, alias="moveAccelerometer")
    level_accelerometer: Optional[bool] = Field(None, alias="levelAccelerometer")
    level_temperature: Optional[bool] = Field(None, alias="levelTemperature")
    level_humidity: Optional[bool] = Field(None, alias="levelHumidity")
    contact_change: Optional[bool] = Field(None, alias="contactChange")
    move_stopped: Optional[bool] = Field(None, alias="moveStopped")
    move_g_timer: Optional[bool] = Field(None, alias="moveGTimer")
    level_accelerometer_change: Optional[bool] = Field(None, alias="levelAccelerometerChange")
    level_magnet_change: Optional[bool] = Field(None, alias="levelMagnetChange")
    level_magnet_timer: Optional[bool] = Field(None, alias="levelMagnetTimer")


class INodeMsd(_MsdBase):
    """
    Decoded iNode manufacturer-specific data.

    The header fields (type, type_label, company_identifier) are only filled in when
    the record is created by this library; the model-specific decoder fills in the
    rest. Every field is optional so that a record can be built up field by field.
    """

    type: Optional[int] = None
    type_label: Optional[str] = Field(None, alias="typeLabel")
    company_identifier: Optional[int] = Field(None, alias="companyIdentifier")
    model: Optional[int] = None
    model_label: Optional[str] = Field(None, alias="modelLabel")
    rtto: Optional[bool] = None
    alarms: Optional[Alarms] = None
    position: Optional[Vector3] = None
    magnetic_field: Optional[Vector3] = Field(None, alias="magneticField")

    def to_dict(self) -> dict:
        """Return the record in its wire shape (camelCase keys, unset fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)
