"""Exceptions raised by aes_stream."""


class AesStreamError(Exception):
    """Base class for all aes_stream errors."""


class BlockLengthError(AesStreamError, ValueError):
    """Key or plaintext handed to the cipher is not 16 bytes."""


class KeyBlockError(AesStreamError):
    """The first block of the stream is too short to be a key."""

    def __init__(self, length: int):
        super().__init__(f"Key block must be 16 bytes, got {length}")
        self.length = length


class ShortBlockError(AesStreamError):
    """A trailing plaintext block is shorter than 16 bytes."""

    def __init__(self, length: int, block_index: int):
        super().__init__(
            f"Plaintext block {block_index} is {length} bytes, expected 16"
        )
        self.length = length
        self.block_index = block_index


class OutputWriteError(AesStreamError):
    """Writing ciphertext to the output stream failed."""
