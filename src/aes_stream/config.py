"""Configuration for stream encryption."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .utils import BLOCK_SIZE


class ShortBlockPolicy(str, Enum):
    """What to do with a trailing plaintext block shorter than 16 bytes."""

    # Fill the missing trailing bytes with zeros and encrypt
    ZERO_PAD = "zero-pad"
    # Ignore the partial block, emit nothing for it
    DROP = "drop"
    # Raise ShortBlockError
    ERROR = "error"


@dataclass
class StreamConfig:
    """Configuration object for stream encryption.

    Built once by the CLI (or by callers of encrypt_stream) and passed
    down to the framer.
    """

    short_block: ShortBlockPolicy = ShortBlockPolicy.ZERO_PAD

    # Block size in bytes, fixed by AES
    block_size: int = BLOCK_SIZE

    # Echo per-round trace lines and a run summary to stderr
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.short_block, ShortBlockPolicy):
            try:
                self.short_block = ShortBlockPolicy(self.short_block)
            except ValueError:
                choices = ", ".join(p.value for p in ShortBlockPolicy)
                raise ValueError(
                    f"short_block must be one of {choices}, got {self.short_block!r}"
                ) from None
        if self.block_size != BLOCK_SIZE:
            raise ValueError(f"block_size must be {BLOCK_SIZE}, got {self.block_size}")
