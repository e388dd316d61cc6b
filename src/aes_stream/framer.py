"""
Block framer: turns a byte stream into AES-128 blocks.

The first 16-byte block of the stream is the key, every following block is
encrypted independently under that key (ECB-like, no chaining) and its
16-byte ciphertext is written to the output in order.

States:
- AWAITING_KEY: next block becomes the key, nothing is written
- ENCRYPTING:   next block is encrypted and its ciphertext written
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO

from .cipher import BlockCipher
from .config import ShortBlockPolicy, StreamConfig
from .errors import BlockLengthError, KeyBlockError, OutputWriteError, ShortBlockError
from .tables import DEFAULT_TABLES, AesTables
from .trace import TraceRecorder
from .utils import BLOCK_SIZE


class FramerState(Enum):
    AWAITING_KEY = "awaiting_key"
    ENCRYPTING = "encrypting"


@dataclass
class StreamStats:
    """Counters for one run of encrypt_stream."""

    blocks_read: int = 0
    blocks_encrypted: int = 0
    bytes_written: int = 0
    # Length of a trailing partial block, if one was seen
    short_block_length: int | None = None
    key_set: bool = False

    def summary(self) -> str:
        lines = [
            f"Blocks read: {self.blocks_read}",
            f"Blocks encrypted: {self.blocks_encrypted}",
            f"Bytes written: {self.bytes_written}",
        ]
        if not self.key_set:
            lines.append("No key block received")
        if self.short_block_length is not None:
            lines.append(f"Trailing short block: {self.short_block_length} bytes")
        return "\n".join(lines)


class BlockFramer:
    """
    Two-state machine feeding blocks to the cipher.

    The key is held for the lifetime of the framer and expanded once.
    """

    def __init__(
        self,
        config: StreamConfig | None = None,
        tables: AesTables = DEFAULT_TABLES,
        tracer: TraceRecorder | None = None,
    ):
        self.config = config or StreamConfig()
        self.tables = tables
        self.tracer = tracer
        self.state = FramerState.AWAITING_KEY
        self.key: bytes | None = None
        self._cipher: BlockCipher | None = None
        self._blocks_fed = 0

    def feed(self, block: bytes) -> bytes | None:
        """
        Consume one block read from the stream.

        Args:
            block: Up to 16 bytes; only the last block of a stream may be short

        Returns:
            16 ciphertext bytes, or None when nothing is to be written
            (key block, or a short block dropped by policy)

        Raises:
            KeyBlockError: If the key block is shorter than 16 bytes
            ShortBlockError: If a short block is seen under the ERROR policy
        """
        if len(block) > BLOCK_SIZE:
            raise BlockLengthError(f"Block must be at most 16 bytes, got {len(block)}")
        self._blocks_fed += 1

        if self.state is FramerState.AWAITING_KEY:
            if len(block) != BLOCK_SIZE:
                raise KeyBlockError(len(block))
            self.key = bytes(block)
            self._cipher = BlockCipher(self.key, self.tables, tracer=self.tracer)
            self.state = FramerState.ENCRYPTING
            return None

        if len(block) < BLOCK_SIZE:
            policy = self.config.short_block
            if policy is ShortBlockPolicy.DROP:
                return None
            if policy is ShortBlockPolicy.ERROR:
                # block index among plaintext blocks, the key block excluded
                raise ShortBlockError(len(block), self._blocks_fed - 2)
            block = bytes(block) + bytes(BLOCK_SIZE - len(block))

        return self._cipher.encrypt(bytes(block))


def read_block(stream: BinaryIO, size: int = BLOCK_SIZE) -> bytes:
    """
    Read one block from a binary stream.

    Partial reads are joined until the block is full, so only the end of the
    stream can produce a block shorter than size. Returns b"" at end of
    stream.
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(size - len(buf))
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)


def _write(output: BinaryIO, data: bytes) -> None:
    try:
        output.write(data)
    except OSError as e:
        raise OutputWriteError(f"Failed to write ciphertext: {e}") from e


def encrypt_stream(
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    config: StreamConfig | None = None,
    tracer: TraceRecorder | None = None,
    tables: AesTables = DEFAULT_TABLES,
) -> StreamStats:
    """
    Encrypt a key-prefixed stream of blocks until end of input.

    Args:
        input_stream: Binary stream; first 16 bytes are the key
        output_stream: Binary stream receiving 16 bytes per plaintext block
        config: Stream configuration (short-block policy)
        tracer: Optional trace recorder passed to the cipher
        tables: Constant tables

    Returns:
        StreamStats for the run

    Raises:
        KeyBlockError: Key block shorter than 16 bytes
        ShortBlockError: Short trailing block under the ERROR policy
        OutputWriteError: Writing or flushing the output failed
    """
    framer = BlockFramer(config, tables=tables, tracer=tracer)
    stats = StreamStats()

    while True:
        block = read_block(input_stream)
        if not block:
            break

        stats.blocks_read += 1
        if len(block) < BLOCK_SIZE:
            stats.short_block_length = len(block)

        ciphertext = framer.feed(block)
        stats.key_set = framer.state is FramerState.ENCRYPTING

        if ciphertext is not None:
            _write(output_stream, ciphertext)
            stats.blocks_encrypted += 1
            stats.bytes_written += len(ciphertext)

    try:
        output_stream.flush()
    except OSError as e:
        raise OutputWriteError(f"Failed to flush output: {e}") from e

    return stats
