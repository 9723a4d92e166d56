"""
Settings for the WOZ INFO chunk.

The INFO chunk describes the disk as a whole: its type, its flags, who
created the image and which machines it runs on. DiskInfo validates those
fields up front so the image writer never has to.

Settings can be supplied as a JSON file:

    {
        "creator": "PictureDSK",
        "write_protected": true,
        "required_ram": 48
    }

Unknown keys are rejected.
"""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# Module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

INFO_VERSION = 2
DISK_TYPE_5_25 = 1
CREATOR_FIELD_SIZE = 32
DEFAULT_CREATOR = "PictureDSK"

# Boot sector formats
BOOT_FORMAT_UNKNOWN = 0
BOOT_FORMAT_16_SECTOR = 1
BOOT_FORMAT_13_SECTOR = 2
BOOT_FORMAT_HYBRID = 3

# Compatible hardware bits
HW_APPLE_II = 0x0001
HW_APPLE_II_PLUS = 0x0002
HW_APPLE_IIE = 0x0004
HW_APPLE_IIC = 0x0008
HW_APPLE_IIE_ENHANCED = 0x0010
HW_APPLE_IIGS = 0x0020
HW_APPLE_IIC_PLUS = 0x0040
HW_APPLE_III = 0x0080
HW_APPLE_III_PLUS = 0x0100

# The whole II series, II through IIc Plus
HW_APPLE_II_SERIES = 0x007F

# 4 microsecond bit cells, in 125 ns units
STANDARD_BIT_TIMING = 32


# =============================================================================
# Disk Info Model
# =============================================================================

class DiskInfo(BaseModel):
    """
    Validated INFO chunk fields.

    Defaults describe a write-protected, synchronized, cleaned 5.25"
    16-sector disk that runs on the whole Apple II series in 64K.
    """
    model_config = ConfigDict(frozen=True, extra='forbid')

    version: int = Field(default=INFO_VERSION, ge=2, le=255)
    disk_type: int = Field(default=DISK_TYPE_5_25, ge=1, le=1)
    write_protected: bool = True
    synchronized: bool = True
    cleaned: bool = True
    creator: str = DEFAULT_CREATOR
    disk_sides: int = Field(default=1, ge=1, le=1)
    boot_sector_format: int = Field(
        default=BOOT_FORMAT_16_SECTOR, ge=BOOT_FORMAT_UNKNOWN, le=BOOT_FORMAT_HYBRID
    )
    optimal_bit_timing: int = Field(default=STANDARD_BIT_TIMING, ge=24, le=40)
    compatible_hardware: int = Field(default=HW_APPLE_II_SERIES, ge=0, le=0x01FF)
    required_ram: int = Field(default=64, ge=0, le=0xFFFF)

    @field_validator('creator')
    @classmethod
    def _creator_fits(cls, value: str) -> str:
        if len(value.encode('utf-8')) > CREATOR_FIELD_SIZE:
            raise ValueError(
                f"creator must encode to at most {CREATOR_FIELD_SIZE} UTF-8 bytes"
            )
        return value

    @property
    def creator_bytes(self) -> bytes:
        """Creator as UTF-8, unpadded."""
        return self.creator.encode('utf-8')


def load_disk_info(path: Union[str, Path]) -> DiskInfo:
    """
    Load DiskInfo settings from a JSON file.

    Args:
        path: Path to the JSON settings file

    Returns:
        Validated DiskInfo

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If the file content is not valid settings
    """
    path = Path(path)
    logger.debug("Loading disk info settings from %s", path)
    text = path.read_text(encoding='utf-8')
    try:
        return DiskInfo.model_validate_json(text)
    except ValidationError:
        logger.error("Invalid disk info settings in %s", path)
        raise


def save_disk_info(info: DiskInfo, path: Union[str, Path]) -> None:
    """Write DiskInfo settings to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(info.model_dump(), indent=2), encoding='utf-8')
    logger.debug("Saved disk info settings to %s", path)
