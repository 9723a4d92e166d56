"""Integration tests for complete PictureDSK workflows."""
