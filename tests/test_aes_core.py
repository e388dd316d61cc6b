"""
Tests for the AES round primitives and key schedule.

Intermediate values are taken from the FIPS-197 Appendix B walkthrough.
"""

import random

import pytest

from aes_stream.aes_core import (
    EXPANDED_KEY_SIZE,
    add_round_key,
    aes_round,
    key_expansion,
    mix_columns,
    mix_single_column,
    round_key_matrix,
    round_keys,
    shift_rows,
    sub_bytes,
)
from aes_stream.errors import BlockLengthError
from aes_stream.utils import bytes_to_state, hex_to_bytes, state_to_hex


FIPS_KEY = "2b7e151628aed2a6abf7158809cf4f3c"

# FIPS-197 Appendix B, round 1 (column-major hex)
R1_START = "193de3bea0f4e22b9ac68d2ae9f84808"
R1_AFTER_SUB = "d42711aee0bf98f1b8b45de51e415230"
R1_AFTER_SHIFT = "d4bf5d30e0b452aeb84111f11e2798e5"
R1_AFTER_MIX = "046681e5e0cb199a48f8d37a2806264c"
R1_ROUND_KEY = "a0fafe1788542cb123a339392a6c7605"
R2_START = "a49c7ff2689f352b6b5bea43026a5049"


def _state(hex_str: str) -> list[list[int]]:
    return bytes_to_state(hex_to_bytes(hex_str))


class TestSubBytes:
    """Tests for sub_bytes."""

    def test_fips197_round1(self) -> None:
        state = _state(R1_START)
        assert sub_bytes(state) is None
        assert state_to_hex(state) == R1_AFTER_SUB


class TestShiftRows:
    """Tests for shift_rows."""

    def test_fips197_round1(self) -> None:
        state = _state(R1_AFTER_SUB)
        shift_rows(state)
        assert state_to_hex(state) == R1_AFTER_SHIFT

    def test_permutation_of_indices(self) -> None:
        """Row r moves left by r positions (column-major byte indices)."""
        state = bytes_to_state(bytes(range(16)))
        shift_rows(state)
        assert [state[r][c] for c in range(4) for r in range(4)] == [
            0, 5, 10, 15,
            4, 9, 14, 3,
            8, 13, 2, 7,
            12, 1, 6, 11,
        ]

    def test_row_zero_unchanged(self) -> None:
        state = bytes_to_state(bytes(range(16)))
        first_row = state[0][:]
        shift_rows(state)
        assert state[0] == first_row

    def test_four_shifts_restore_state(self) -> None:
        state = bytes_to_state(bytes(range(100, 116)))
        original = [row[:] for row in state]
        for _ in range(4):
            shift_rows(state)
        assert state == original


class TestMixColumns:
    """Tests for mix_columns and mix_single_column."""

    @pytest.mark.parametrize("column,expected", [
        ([0xdb, 0x13, 0x53, 0x45], [0x8e, 0x4d, 0xa1, 0xbc]),
        ([0xf2, 0x0a, 0x22, 0x5c], [0x9f, 0xdc, 0x58, 0x9d]),
        ([0x01, 0x01, 0x01, 0x01], [0x01, 0x01, 0x01, 0x01]),
        ([0xc6, 0xc6, 0xc6, 0xc6], [0xc6, 0xc6, 0xc6, 0xc6]),
        ([0xd4, 0xd4, 0xd4, 0xd5], [0xd5, 0xd5, 0xd7, 0xd6]),
        ([0x2d, 0x26, 0x31, 0x4c], [0x4d, 0x7e, 0xbd, 0xf8]),
    ])
    def test_known_columns(self, column: list[int], expected: list[int]) -> None:
        assert mix_single_column(column) == expected

    def test_does_not_modify_input_column(self) -> None:
        column = [0xdb, 0x13, 0x53, 0x45]
        mix_single_column(column)
        assert column == [0xdb, 0x13, 0x53, 0x45]

    def test_fips197_round1(self) -> None:
        state = _state(R1_AFTER_SHIFT)
        mix_columns(state)
        assert state_to_hex(state) == R1_AFTER_MIX

    def test_zero_state_stays_zero(self) -> None:
        state = bytes_to_state(bytes(16))
        mix_columns(state)
        assert state_to_hex(state) == "00" * 16


class TestAddRoundKey:
    """Tests for add_round_key."""

    def test_fips197_round1(self) -> None:
        state = _state(R1_AFTER_MIX)
        add_round_key(state, _state(R1_ROUND_KEY))
        assert state_to_hex(state) == R2_START

    def test_applying_twice_restores_state(self) -> None:
        state = _state(R1_START)
        key = _state(R1_ROUND_KEY)
        add_round_key(state, key)
        add_round_key(state, key)
        assert state_to_hex(state) == R1_START

    def test_round_key_not_modified(self) -> None:
        key = _state(R1_ROUND_KEY)
        add_round_key(_state(R1_START), key)
        assert state_to_hex(key) == R1_ROUND_KEY


class TestAesRound:
    """Tests for the composite round."""

    def test_fips197_round1(self) -> None:
        state = _state(R1_START)
        aes_round(state, _state(R1_ROUND_KEY))
        assert state_to_hex(state) == R2_START

    def test_order_matters(self) -> None:
        """Running MixColumns before ShiftRows gives a different state."""
        state = _state(R1_START)
        sub_bytes(state)
        mix_columns(state)
        shift_rows(state)
        add_round_key(state, _state(R1_ROUND_KEY))
        assert state_to_hex(state) != R2_START


class TestKeyExpansion:
    """Tests for key_expansion."""

    def test_fips197_appendix_a1(self) -> None:
        expanded = key_expansion(hex_to_bytes(FIPS_KEY))
        assert expanded[:16].hex() == FIPS_KEY
        assert expanded[16:32].hex() == R1_ROUND_KEY
        assert expanded[160:176].hex() == "d014f9a8c9ee2589e13f0cc8b6630ca6"

    def test_all_zero_key(self) -> None:
        expanded = key_expansion(bytes(16))
        assert expanded[16:32].hex() == "62636363626363636263636362636363"
        assert expanded[160:176].hex() == "b4ef5bcb3e92e21123e951cf6f8f188e"

    @pytest.mark.parametrize("seed", range(10))
    def test_length_is_176(self, seed: int) -> None:
        rng = random.Random(seed)
        key = bytes(rng.randint(0, 255) for _ in range(16))
        expanded = key_expansion(key)
        assert len(expanded) == EXPANDED_KEY_SIZE == 176

    def test_deterministic(self) -> None:
        key = bytes(range(16))
        assert key_expansion(key) == key_expansion(key)

    @pytest.mark.parametrize("length", [0, 15, 17, 32])
    def test_invalid_key_length(self, length: int) -> None:
        with pytest.raises(BlockLengthError, match="Key must be 16 bytes"):
            key_expansion(bytes(length))

    def test_length_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            key_expansion(bytes(8))


class TestRoundKeys:
    """Tests for round-key matrix views."""

    def test_round_key_matrix_is_column_major(self) -> None:
        expanded = key_expansion(hex_to_bytes(FIPS_KEY))
        matrix = round_key_matrix(expanded, 1)
        assert state_to_hex(matrix) == R1_ROUND_KEY
        assert matrix[0] == [0xa0, 0x88, 0x23, 0x2a]

    def test_eleven_round_keys(self) -> None:
        expanded = key_expansion(hex_to_bytes(FIPS_KEY))
        keys = round_keys(expanded)
        assert len(keys) == 11
        for r, matrix in enumerate(keys):
            assert state_to_hex(matrix) == expanded[16 * r:16 * r + 16].hex()

    def test_round_out_of_range(self) -> None:
        expanded = key_expansion(bytes(16))
        with pytest.raises(ValueError, match="round_num"):
            round_key_matrix(expanded, 11)

    def test_wrong_expanded_key_size(self) -> None:
        with pytest.raises(ValueError, match="Expanded key must be 176 bytes"):
            round_keys(bytes(160))
