"""Exceptions raised by the GCR codec."""

from typing import Optional


class EncodingError(ValueError):
    """Raised when encoder input or destination violates the layout."""

    def __init__(self, message: str, track: Optional[int] = None,
                 bit_index: Optional[int] = None):
        self.message = message
        self.track = track
        self.bit_index = bit_index
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.track is not None:
            parts.append(f"[Track: {self.track}]")
        if self.bit_index is not None:
            parts.append(f"[Bit: {self.bit_index}]")
        return " ".join(parts)
