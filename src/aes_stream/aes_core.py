"""
AES-128 round primitives and key schedule.

The round primitives operate in place on a 4x4 state (see utils for the
column-major layout). Tables are passed explicitly and default to the
process-wide DEFAULT_TABLES.
"""

from __future__ import annotations

from .errors import BlockLengthError
from .gf import gf_mul
from .tables import DEFAULT_TABLES, AesTables
from .utils import BLOCK_SIZE, State, bytes_to_state

KEY_SIZE = 16
NUM_ROUNDS = 10
EXPANDED_KEY_SIZE = BLOCK_SIZE * (NUM_ROUNDS + 1)

# MixColumns matrix
MIX_MATRIX = (
    (2, 3, 1, 1),
    (1, 2, 3, 1),
    (1, 1, 2, 3),
    (3, 1, 1, 2),
)


# ------------------------------------------------------------------
# Round primitives
# ------------------------------------------------------------------

def sub_bytes(state: State, tables: AesTables = DEFAULT_TABLES) -> None:
    """Replace every byte of the state with its S-box image."""
    sbox = tables.sbox
    for row in state:
        for col in range(4):
            row[col] = sbox[row[col]]


def shift_rows(state: State) -> None:
    """Rotate row r left by r positions."""
    for r in range(1, 4):
        state[r][:] = state[r][r:] + state[r][:r]


def mix_single_column(column: list[int], tables: AesTables = DEFAULT_TABLES) -> list[int]:
    """
    Multiply one column by the MixColumns matrix over GF(2^8).

    Args:
        column: 4 bytes, top to bottom
        tables: Constant tables for gf_mul

    Returns:
        The mixed column as a new list
    """
    mixed = []
    for coeffs in MIX_MATRIX:
        acc = 0
        for coeff, value in zip(coeffs, column):
            acc ^= gf_mul(value, coeff, tables)
        mixed.append(acc)
    return mixed


def mix_columns(state: State, tables: AesTables = DEFAULT_TABLES) -> None:
    """Apply MixColumns to each of the 4 columns."""
    for col in range(4):
        mixed = mix_single_column([state[row][col] for row in range(4)], tables)
        for row in range(4):
            state[row][col] = mixed[row]


def add_round_key(state: State, round_key: State) -> None:
    """XOR the state with a 4x4 round-key matrix."""
    for row in range(4):
        for col in range(4):
            state[row][col] ^= round_key[row][col]


def aes_round(state: State, round_key: State, tables: AesTables = DEFAULT_TABLES) -> None:
    """
    One full AES round: SubBytes -> ShiftRows -> MixColumns -> AddRoundKey.
    """
    sub_bytes(state, tables)
    shift_rows(state)
    mix_columns(state, tables)
    add_round_key(state, round_key)


# ------------------------------------------------------------------
# Key schedule
# ------------------------------------------------------------------

def _schedule_core(word: list[int], iteration: int, tables: AesTables) -> list[int]:
    """RotWord, SubWord, then XOR the round constant into the first byte."""
    word = word[1:] + word[:1]
    word = [tables.sbox[b] for b in word]
    word[0] ^= tables.rcon[iteration]
    return word


def key_expansion(key: bytes, tables: AesTables = DEFAULT_TABLES) -> bytes:
    """
    Expand a 16-byte key into 11 round keys.

    Round key r occupies bytes [16r, 16r + 16) of the result.

    Args:
        key: 16-byte AES-128 key
        tables: Constant tables (S-box and RCON)

    Returns:
        176-byte expanded key

    Raises:
        BlockLengthError: If key is not 16 bytes
    """
    if len(key) != KEY_SIZE:
        raise BlockLengthError(f"Key must be 16 bytes, got {len(key)}")

    expanded = bytearray(key)
    iteration = 1

    while len(expanded) < EXPANDED_KEY_SIZE:
        temp = list(expanded[-4:])
        if len(expanded) % KEY_SIZE == 0:
            temp = _schedule_core(temp, iteration, tables)
            iteration += 1

        base = len(expanded) - KEY_SIZE
        for i in range(4):
            expanded.append(expanded[base + i] ^ temp[i])

    return bytes(expanded)


def round_key_matrix(expanded_key: bytes, round_num: int) -> State:
    """4x4 matrix view of round key round_num (0..10)."""
    if not 0 <= round_num <= NUM_ROUNDS:
        raise ValueError(f"round_num must be 0..{NUM_ROUNDS}, got {round_num}")
    return bytes_to_state(expanded_key, round_num * BLOCK_SIZE)


def round_keys(expanded_key: bytes) -> list[State]:
    """All 11 round-key matrices of an expanded key."""
    if len(expanded_key) != EXPANDED_KEY_SIZE:
        raise ValueError(
            f"Expanded key must be {EXPANDED_KEY_SIZE} bytes, got {len(expanded_key)}"
        )
    return [round_key_matrix(expanded_key, r) for r in range(NUM_ROUNDS + 1)]
