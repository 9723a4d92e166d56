"""
Unit tests for INFO chunk settings.
"""

import json

import pytest
from pydantic import ValidationError

from picturedsk.core import DiskInfo, TrackData, load_disk_info, save_disk_info
from picturedsk.imaging import WozImage
from tests.fixtures import parse_chunks


class TestDiskInfoDefaults:
    """Test default settings."""

    def test_defaults(self):
        """Defaults describe a protected 16-sector disk for the whole II series."""
        info = DiskInfo()

        assert info.version == 2
        assert info.disk_type == 1
        assert info.write_protected is True
        assert info.synchronized is True
        assert info.cleaned is True
        assert info.creator == "PictureDSK"
        assert info.disk_sides == 1
        assert info.boot_sector_format == 1
        assert info.optimal_bit_timing == 32
        assert info.compatible_hardware == 0x7F
        assert info.required_ram == 64

    def test_frozen(self):
        """Settings cannot be changed after validation."""
        info = DiskInfo()
        with pytest.raises(ValidationError):
            info.creator = "Other"


class TestDiskInfoValidation:
    """Test field validation."""

    def test_creator_fits_32_bytes(self):
        """A 32-byte creator is accepted."""
        assert DiskInfo(creator="x" * 32).creator_bytes == b"x" * 32

    def test_creator_too_long(self):
        """Creator longer than 32 bytes is rejected."""
        with pytest.raises(ValidationError):
            DiskInfo(creator="x" * 33)

    def test_creator_counted_in_utf8_bytes(self):
        """Multi-byte characters count by their encoded size."""
        with pytest.raises(ValidationError):
            DiskInfo(creator="é" * 17)

    @pytest.mark.parametrize("timing", [23, 41])
    def test_bit_timing_range(self, timing):
        """Bit timing must be 24-40."""
        with pytest.raises(ValidationError):
            DiskInfo(optimal_bit_timing=timing)

    def test_hardware_mask_limit(self):
        """Only the nine defined hardware bits may be set."""
        assert DiskInfo(compatible_hardware=0x1FF).compatible_hardware == 0x1FF
        with pytest.raises(ValidationError):
            DiskInfo(compatible_hardware=0x200)

    def test_all_hardware_bits_written(self):
        """A mask with every machine bit set reaches the INFO payload."""
        info = DiskInfo(compatible_hardware=0x1FF)
        image = WozImage.from_tracks([TrackData(bytes(512))], info).to_bytes()
        _, payload = parse_chunks(image)['INFO']
        assert payload[40:42] == b'\xFF\x01'

    def test_unknown_field_rejected(self):
        """Misspelled settings are errors, not silently ignored."""
        with pytest.raises(ValidationError):
            DiskInfo(write_protect=False)


class TestDiskInfoFiles:
    """Test JSON settings files."""

    def test_load_partial_settings(self, tmp_path):
        """Missing keys take their defaults."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"creator": "Test Suite", "required_ram": 48}))

        info = load_disk_info(path)

        assert info.creator == "Test Suite"
        assert info.required_ram == 48
        assert info.optimal_bit_timing == 32

    def test_load_invalid_settings(self, tmp_path):
        """Invalid values raise ValidationError."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"optimal_bit_timing": 99}))

        with pytest.raises(ValidationError):
            load_disk_info(path)

    def test_load_missing_file(self, tmp_path):
        """A missing file raises OSError."""
        with pytest.raises(OSError):
            load_disk_info(tmp_path / "missing.json")

    def test_save_writes_json(self, tmp_path):
        """Saved settings are plain JSON."""
        path = tmp_path / "nested" / "settings.json"
        save_disk_info(DiskInfo(creator="Saved"), path)

        assert json.loads(path.read_text())["creator"] == "Saved"
        assert load_disk_info(path) == DiskInfo(creator="Saved")
