"""
Test suite for PictureDSK.

This package contains:
- Unit tests for the codec, the WOZ writer and the picture pipeline
- Integration tests building complete picture disks
- Fixtures with payloads, pictures and bitstream readers
"""
