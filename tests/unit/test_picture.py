"""
Unit tests for the picture pipeline.

Tests greyscale sampling, hi-res screen packing, track 0 assembly and the
polar texture tracks.
"""

import logging

import numpy as np
import pytest

from picturedsk.imaging import ImageReadError
from picturedsk.picture import (
    HIRES_IMAGE_SIZE,
    PICTURE_TRACK_COUNT,
    as_pixel_array,
    build_picture_disk,
    build_texture_track,
    build_track_zero_payload,
    format_display_message,
    load_pixels,
    pack_hires_screen,
    sample_greyscale,
)
from picturedsk.picture.boot_sectors import (
    BOOT_1_SECTOR_0,
    BOOT_2_SECTOR_F,
    DISPLAY_MESSAGE_OFFSET,
)
from picturedsk.picture.disk_builder import texture_track_radius
from tests.fixtures import BLACK, WHITE, solid_picture, split_picture


def grey_picture(level: int) -> np.ndarray:
    return solid_picture((level, level, level, 255), 1, 1)


class TestPixelArrays:
    """Test pixel buffer validation."""

    def test_greyscale_expanded(self):
        """2-D arrays become three identical channels."""
        pixels = as_pixel_array(np.array([[0, 255]], dtype=np.uint8))

        assert pixels.shape == (1, 2, 3)
        assert pixels[0, 1].tolist() == [255, 255, 255]

    @pytest.mark.parametrize("shape", [(4,), (2, 2, 2), (2, 2, 5), (0, 3, 4)])
    def test_bad_shapes(self, shape):
        """Only non-empty 2-D or 3/4-channel pictures are accepted."""
        with pytest.raises(ValueError):
            as_pixel_array(np.zeros(shape, dtype=np.uint8))

    def test_out_of_range_values(self):
        """Values outside 0-255 are rejected."""
        with pytest.raises(ValueError):
            as_pixel_array(np.full((1, 1, 3), 300))


class TestGreyscaleSampling:
    """Test sampling and thresholding."""

    def test_white_and_black(self):
        """White samples as 1, black as 0."""
        assert sample_greyscale(solid_picture(WHITE), 0.5, 0.5) == 1.0
        assert sample_greyscale(solid_picture(BLACK), 0.5, 0.5) == 0.0

    def test_mid_grey_threshold(self):
        """128 rounds up to white, 127 down to black."""
        assert sample_greyscale(grey_picture(128), 0.5, 0.5) == 1.0
        assert sample_greyscale(grey_picture(127), 0.5, 0.5) == 0.0

    def test_luminance_in_linear_light(self):
        """Pure green is light, pure red and blue are dark."""
        assert sample_greyscale(solid_picture((0, 255, 0, 255), 1, 1), 0, 0) == 1.0
        assert sample_greyscale(solid_picture((255, 0, 0, 255), 1, 1), 0, 0) == 0.0
        assert sample_greyscale(solid_picture((0, 0, 255, 255), 1, 1), 0, 0) == 0.0

    def test_alpha_ignored(self):
        """Transparent white still samples as white."""
        assert sample_greyscale(solid_picture((255, 255, 255, 0), 1, 1), 0, 0) == 1.0

    def test_nearest_pixel(self):
        """u below 0.5 hits the left pixel of a two-pixel picture."""
        pixels = split_picture(vertical=True)
        assert sample_greyscale(pixels, 0.49, 0.0) == 1.0
        assert sample_greyscale(pixels, 0.5, 0.0) == 0.0

    def test_single_precision_coordinates(self):
        """Coordinates round to single precision before choosing a pixel."""
        pixels = split_picture(vertical=True)
        assert sample_greyscale(pixels, 0.49999999, 0.0) == 0.0
        assert sample_greyscale(pixels, 0.4999999, 0.0) == 1.0

    def test_coordinates_clamped(self):
        """Coordinates outside [0, 1] clamp to the edges."""
        pixels = split_picture(vertical=True)
        assert sample_greyscale(pixels, -3.0, 0.5) == 1.0
        assert sample_greyscale(pixels, 1.0, 0.5) == 0.0
        assert sample_greyscale(pixels, 7.0, 9.0) == 0.0

    def test_array_coordinates(self):
        """Array input samples element-wise."""
        pixels = split_picture(vertical=True)
        result = sample_greyscale(pixels, np.array([0.1, 0.9, 0.2]), 0.0)
        assert result.tolist() == [1.0, 0.0, 1.0]


class TestHiresScreen:
    """Test hi-res screen packing."""

    def test_white_screen(self):
        """Every pixel lit: all bytes FF."""
        screen = pack_hires_screen(solid_picture(WHITE))
        assert screen == b'\xFF' * HIRES_IMAGE_SIZE

    def test_black_screen(self):
        """No pixel lit: only the palette bit."""
        screen = pack_hires_screen(solid_picture(BLACK))
        assert screen == b'\x80' * HIRES_IMAGE_SIZE

    def test_left_half_lit(self):
        """Columns 0-73 lit, lowest bit leftmost."""
        screen = pack_hires_screen(split_picture(vertical=True))
        row = screen[:21]

        assert row[:10] == b'\xFF' * 10
        assert row[10] == 0x8F
        assert row[11:] == b'\x80' * 10
        assert screen[21:42] == row


class TestDisplayMessage:
    """Test message clean-up."""

    def test_uppercased_and_terminated(self):
        """Lower case is raised; two CRs and a NUL end the message."""
        assert format_display_message("hello, world!") == b'HELLO, WORLD!\r\r\x00'

    @pytest.mark.parametrize("character", ['{', '~', '`', '\t', 'é'])
    def test_unprintable_become_spaces(self, character):
        """Characters outside space to underscore become spaces."""
        assert format_display_message(f"A{character}B") == b'A B\r\r\x00'

    def test_truncated_to_40(self):
        """Messages are cut to 40 characters."""
        text = format_display_message("X" * 60)
        assert text == b'X' * 40 + b'\r\r\x00'

    def test_empty_message(self):
        """An empty message is just the terminator."""
        assert format_display_message("") == b'\r\r\x00'


class TestTrackZero:
    """Test track 0 assembly."""

    @pytest.fixture
    def screen(self):
        return bytes((i * 7) & 0xFF for i in range(HIRES_IMAGE_SIZE))

    def test_boot_sectors(self, screen):
        """Boot stages occupy logical sectors 0 and 15."""
        payload = build_track_zero_payload(screen)

        assert len(payload) == 4096
        assert payload[:0x100] == BOOT_1_SECTOR_0
        assert payload[0xF00:] == BOOT_2_SECTOR_F

    @pytest.mark.parametrize("screen_offset,track_offset", [
        (0x000, 0x800),
        (0x100, 0x100),
        (0x200, 0x900),
        (0x700, 0x400),
        (0xB00, 0x600),
    ])
    def test_screen_slices(self, screen, screen_offset, track_offset):
        """Screen slices alternate between the two halves of the track."""
        payload = build_track_zero_payload(screen)
        assert payload[track_offset:track_offset + 0x100] == \
            screen[screen_offset:screen_offset + 0x100]

    def test_last_slice_partial(self, screen):
        """Only 15 screen bytes remain for the last slice."""
        payload = build_track_zero_payload(screen)

        assert payload[0xE00:0xE0F] == screen[0xC00:]
        assert payload[0xE0F:0xF00] == bytes(0xF1)

    def test_sector_7_unused(self, screen):
        """Logical sector 7 stays empty."""
        payload = build_track_zero_payload(screen)
        assert payload[0x700:0x800] == bytes(0x100)

    def test_message_placed(self, screen):
        """The message overwrites the built-in one in sector 15."""
        payload = build_track_zero_payload(screen, "disk two")
        start = 0xF00 + DISPLAY_MESSAGE_OFFSET

        assert payload[start:start + 11] == b'DISK TWO\r\r\x00'
        assert payload[0xF00:start] == BOOT_2_SECTOR_F[:DISPLAY_MESSAGE_OFFSET]

    def test_wrong_screen_size(self):
        """The packed screen must be 3087 bytes."""
        with pytest.raises(ValueError):
            build_track_zero_payload(bytes(3000))


class TestTextureTracks:
    """Test polar texture tracks."""

    def test_radius_range(self):
        """Track 1 on the outer edge, shrinking evenly towards the hub."""
        step = (0.5 - 0.1415) / (PICTURE_TRACK_COUNT - 1)

        assert texture_track_radius(1) == pytest.approx(0.5)
        assert texture_track_radius(2) == pytest.approx(0.5 - step)
        assert texture_track_radius(PICTURE_TRACK_COUNT - 1) == pytest.approx(0.5 - 44 * step)

    def test_radius_is_single_precision(self):
        """Radii are float32 values."""
        for index in range(1, PICTURE_TRACK_COUNT):
            radius = texture_track_radius(index)
            assert float(np.float32(radius)) == radius

    def test_white_track(self):
        """A white picture gives all FF bytes."""
        track = build_texture_track(solid_picture(WHITE), 1)

        assert track.data == b'\xFF' * 6656
        assert track.bit_count == 53248

    def test_black_track(self):
        """A black picture gives all 96 bytes."""
        track = build_texture_track(solid_picture(BLACK), 20)
        assert track.data == b'\x96' * 6656

    def test_track_starts_at_top(self):
        """Byte 0 samples the top of the picture, the midpoint the bottom."""
        track = build_texture_track(split_picture(vertical=False), 1)

        assert track.data[0] == 0xFF
        assert track.data[3328] == 0x96

    @pytest.mark.parametrize("index", [0, PICTURE_TRACK_COUNT])
    def test_invalid_track_index(self, index):
        """Track 0 is not a texture track."""
        with pytest.raises(ValueError):
            build_texture_track(solid_picture(WHITE), index)


class TestPictureDisk:
    """Test building the whole track set."""

    def test_track_set(self):
        """46 tracks: one encoded track 0, then texture tracks."""
        tracks = build_picture_disk(solid_picture(WHITE), "hi")

        assert len(tracks) == PICTURE_TRACK_COUNT
        assert tracks[0].bit_count == 50632
        assert all(len(t.data) == 6656 for t in tracks)
        assert all(t.bit_count == 53248 for t in tracks[1:])

    def test_track_zero_is_gcr(self):
        """Track 0 starts with the sync leader."""
        tracks = build_picture_disk(solid_picture(BLACK))
        assert tracks[0].data[:3] == b'\xFF\x3F\xCF'

    def test_logs_track_zero_encoding(self, caplog):
        """The encoded track 0 size is logged at debug level."""
        with caplog.at_level(logging.DEBUG):
            build_picture_disk(solid_picture(BLACK))
        assert "encode_track: track 0: 50632 bits" in caplog.messages


class TestLoadPixels:
    """Test loading pictures from files."""

    def test_load_npy(self, tmp_path):
        """numpy arrays load directly."""
        path = tmp_path / "picture.npy"
        np.save(path, solid_picture(WHITE, 3, 2))

        pixels = load_pixels(path)

        assert pixels.shape == (2, 3, 4)
        assert pixels.dtype == np.uint8

    def test_missing_file(self, tmp_path):
        """Missing files raise ImageReadError."""
        with pytest.raises(ImageReadError):
            load_pixels(tmp_path / "missing.npy")

    def test_bad_npy_shape(self, tmp_path):
        """Arrays that are not pictures raise ImageReadError."""
        path = tmp_path / "vector.npy"
        np.save(path, np.zeros(10, dtype=np.uint8))

        with pytest.raises(ImageReadError):
            load_pixels(path)

    def test_corrupt_npy(self, tmp_path):
        """Unreadable .npy files raise ImageReadError."""
        path = tmp_path / "broken.npy"
        path.write_bytes(b"not numpy")

        with pytest.raises(ImageReadError):
            load_pixels(path)

    def test_corrupt_image_file(self, tmp_path):
        """Files Qt cannot decode raise ImageReadError."""
        pytest.importorskip("PyQt6.QtGui")
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")

        with pytest.raises(ImageReadError):
            load_pixels(path)
