"""
Known-answer and reference checks of the cipher.

PyCryptodome serves as the independent reference implementation. Every
check returns a list of Mismatch entries, empty when the cipher agrees.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from Crypto.Cipher import AES

from .cipher import BlockCipher
from .errors import BlockLengthError
from .utils import BLOCK_SIZE

EncryptFn = Callable[[bytes, bytes], bytes]


@dataclass(frozen=True)
class KnownAnswer:
    """One (key, plaintext, ciphertext) vector from a published source."""

    label: str
    key: bytes
    plaintext: bytes
    ciphertext: bytes

    @classmethod
    def from_hex(cls, label: str, key: str, plaintext: str, ciphertext: str) -> KnownAnswer:
        return cls(label, bytes.fromhex(key), bytes.fromhex(plaintext), bytes.fromhex(ciphertext))


KNOWN_ANSWERS = [
    KnownAnswer.from_hex(
        "FIPS-197 Appendix B",
        "2b7e151628aed2a6abf7158809cf4f3c",
        "3243f6a8885a308d313198a2e0370734",
        "3925841d02dc09fbdc118597196a0b32",
    ),
    KnownAnswer.from_hex(
        "FIPS-197 Appendix C.1",
        "000102030405060708090a0b0c0d0e0f",
        "00112233445566778899aabbccddeeff",
        "69c4e0d86a7b0430d8cdb78070b4c55a",
    ),
    KnownAnswer.from_hex(
        "All-zero key and plaintext",
        "00" * 16,
        "00" * 16,
        "66e94bd4ef8a2c3b884cfa59ca342b2e",
    ),
    # NIST AESAVS GFSbox vectors (zero key)
    KnownAnswer.from_hex(
        "GFSbox #1",
        "00" * 16,
        "f34481ec3cc627bacd5dc3fb08f273e6",
        "0336763e966d92595a567cc9ce537f5e",
    ),
    KnownAnswer.from_hex(
        "GFSbox #2",
        "00" * 16,
        "9798c4640bad75c7c3227db910174e72",
        "a9a1631bf4996954ebc093957b234589",
    ),
    KnownAnswer.from_hex(
        "All-ones key",
        "ff" * 16,
        "00" * 16,
        "a1f6258c877d5fcd8964484538bfc92c",
    ),
    KnownAnswer.from_hex(
        "All-ones key and plaintext",
        "ff" * 16,
        "ff" * 16,
        "bcbf217cb280cf30b2517052193ab979",
    ),
]


@dataclass(frozen=True)
class Mismatch:
    """A block whose ciphertext disagrees with the expected value."""

    label: str
    key: bytes
    plaintext: bytes
    expected: bytes
    got: bytes

    def describe(self) -> str:
        return f"{self.label}: expected {self.expected.hex()}, got {self.got.hex()}"


def reference_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt one block with PyCryptodome's AES in ECB mode.

    Raises:
        BlockLengthError: If key or plaintext is not 16 bytes
    """
    for name, value in (("Key", key), ("Plaintext", plaintext)):
        if len(value) != BLOCK_SIZE:
            raise BlockLengthError(f"{name} must be 16 bytes, got {len(value)}")
    return AES.new(key, AES.MODE_ECB).encrypt(plaintext)


def _encrypt(key: bytes, plaintext: bytes) -> bytes:
    return BlockCipher(key).encrypt(plaintext)


def check_block(
    key: bytes, plaintext: bytes, ciphertext: bytes, label: str = "block"
) -> Mismatch | None:
    """Compare a ciphertext against the reference; None when they agree."""
    expected = reference_encrypt(key, plaintext)
    if ciphertext == expected:
        return None
    return Mismatch(label, key, plaintext, expected, ciphertext)


def run_known_answers(encrypt: EncryptFn = _encrypt) -> list[Mismatch]:
    """Run every entry of KNOWN_ANSWERS through encrypt(key, plaintext)."""
    failures = []
    for vec in KNOWN_ANSWERS:
        got = encrypt(vec.key, vec.plaintext)
        if got != vec.ciphertext:
            failures.append(Mismatch(vec.label, vec.key, vec.plaintext, vec.ciphertext, got))
    return failures


def run_random(
    num_tests: int,
    random_bytes: Callable[[int], bytes],
    encrypt: EncryptFn = _encrypt,
) -> list[Mismatch]:
    """
    Compare encrypt() with the reference on random keys and plaintexts.

    Args:
        num_tests: Number of random (key, plaintext) pairs
        random_bytes: Source of random bytes, e.g. secrets.token_bytes
        encrypt: Cipher under test, called as encrypt(key, plaintext)
    """
    failures = []
    for i in range(num_tests):
        key = random_bytes(BLOCK_SIZE)
        plaintext = random_bytes(BLOCK_SIZE)
        mismatch = check_block(key, plaintext, encrypt(key, plaintext), label=f"random #{i + 1}")
        if mismatch is not None:
            failures.append(mismatch)
    return failures
