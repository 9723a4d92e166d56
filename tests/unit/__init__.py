"""Unit tests for PictureDSK components."""
