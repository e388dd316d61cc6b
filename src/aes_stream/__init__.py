"""
AES-128 stream encryption.

Reads a byte stream in 16-byte blocks: the first block is the key, every
following block is encrypted independently under it.
"""

__version__ = "1.0.0"

from .tables import AesTables, DEFAULT_TABLES
from .gf import gf_mul
from .aes_core import key_expansion
from .cipher import BlockCipher, encrypt_block, encrypt_state
from .config import ShortBlockPolicy, StreamConfig
from .framer import BlockFramer, FramerState, StreamStats, encrypt_stream

__all__ = [
    "AesTables",
    "DEFAULT_TABLES",
    "gf_mul",
    "key_expansion",
    "BlockCipher",
    "encrypt_block",
    "encrypt_state",
    "ShortBlockPolicy",
    "StreamConfig",
    "BlockFramer",
    "FramerState",
    "StreamStats",
    "encrypt_stream",
]
