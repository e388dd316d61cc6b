"""
AES-128 cipher driver.

Round schedule:
- Round 0: AddRoundKey
- Rounds 1-9: Full round (SubBytes, ShiftRows, MixColumns, AddRoundKey)
- Round 10: Final round (SubBytes, ShiftRows, AddRoundKey, no MixColumns)

Total: 11 rounds
"""

from __future__ import annotations

from .aes_core import (
    KEY_SIZE,
    key_expansion,
    round_keys,
    sub_bytes,
    shift_rows,
    mix_columns,
    add_round_key,
)
from .counters import OperationCounter, RoundCounter
from .errors import BlockLengthError
from .tables import DEFAULT_TABLES, AesTables
from .trace import TraceRecorder
from .utils import BLOCK_SIZE, State, bytes_to_state, copy_state, state_to_bytes

FULL_ROUND = ("SubBytes", "ShiftRows", "MixColumns", "AddRoundKey")

# (round, operations)
ROUND_SCHEDULE = (
    [(0, ("AddRoundKey",))]
    + [(r, FULL_ROUND) for r in range(1, 10)]
    + [(10, ("SubBytes", "ShiftRows", "AddRoundKey"))]  # Final round: no MixColumns
)


class BlockCipher:
    """
    AES-128 encryption of single 16-byte blocks under one key.

    The key is expanded once when the cipher is built and reused for every
    block; each call to encrypt() works on a freshly allocated state.
    """

    def __init__(
        self,
        key: bytes,
        tables: AesTables = DEFAULT_TABLES,
        tracer: TraceRecorder | None = None,
        schedule=ROUND_SCHEDULE,
    ):
        """
        Initialize the cipher.

        Args:
            key: 16-byte AES key
            tables: Constant tables
            tracer: Optional trace recorder for verbose output
            schedule: Sequence of (round, operations) to execute
        """
        if len(key) != KEY_SIZE:
            raise BlockLengthError(f"Key must be 16 bytes, got {len(key)}")

        self.key = bytes(key)
        self.tables = tables
        self.tracer = tracer
        self.schedule = schedule
        self.expanded_key = key_expansion(self.key, tables)
        self._round_keys = round_keys(self.expanded_key)

        self.round_counter = RoundCounter()
        self.op_counter = OperationCounter()
        self._block_index = 0

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt a single 16-byte block.

        Args:
            plaintext: 16-byte plaintext

        Returns:
            16-byte ciphertext
        """
        if len(plaintext) != BLOCK_SIZE:
            raise BlockLengthError(f"Plaintext must be 16 bytes, got {len(plaintext)}")
        return self.encrypt_state(bytes_to_state(plaintext))

    def encrypt_state(self, state: State) -> bytes:
        """
        Run the round schedule over a 4x4 state, in place.

        Returns:
            The final state serialized to 16 bytes
        """
        self.round_counter.reset()
        self.op_counter.reset()

        for round_num, operations in self.schedule:
            self._execute_round(state, round_num, operations)

        self._block_index += 1
        return state_to_bytes(state)

    def _execute_round(self, state: State, round_num: int, operations) -> None:
        self.round_counter.increment()
        round_key = self._round_keys[round_num]

        if self.tracer:
            self.tracer.record(
                block=self._block_index,
                round=round_num,
                operation="round_start",
                state=copy_state(state),
                round_key=copy_state(round_key),
            )

        for op in operations:
            if op == "SubBytes":
                sub_bytes(state, self.tables)
            elif op == "ShiftRows":
                shift_rows(state)
            elif op == "MixColumns":
                mix_columns(state, self.tables)
            elif op == "AddRoundKey":
                add_round_key(state, round_key)
            else:
                raise ValueError(f"Unknown operation: {op}")
            self.op_counter.add(op)

            if self.tracer and self.tracer.verbose:
                self.tracer.record(
                    block=self._block_index,
                    round=round_num,
                    operation=op,
                    state=copy_state(state),
                )

    @property
    def rounds(self) -> int:
        """Rounds executed by the last encryption."""
        return self.round_counter.count


def encrypt_state(state: State, key: bytes, tables: AesTables = DEFAULT_TABLES) -> bytes:
    """
    Encrypt a 4x4 state with a 16-byte key.

    The key is expanded on every call; use BlockCipher to reuse a schedule.
    """
    return BlockCipher(key, tables).encrypt_state(state)


def encrypt_block(
    plaintext: bytes,
    key: bytes,
    tables: AesTables = DEFAULT_TABLES,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Convenience function to encrypt one 16-byte block.

    Args:
        plaintext: 16-byte plaintext
        key: 16-byte AES key
        tables: Constant tables
        tracer: Optional trace recorder

    Returns:
        16-byte ciphertext
    """
    return BlockCipher(key, tables, tracer=tracer).encrypt(plaintext)
