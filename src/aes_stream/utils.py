"""
Block/state conversions and hex formatting.

The AES state is a 4x4 byte matrix, state[row][col], filled column-major
from a 16-byte block:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[2]  -> state[2][0]
  byte[3]  -> state[3][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]
"""

from __future__ import annotations

BLOCK_SIZE = 16

State = list[list[int]]


def bytes_to_state(data: bytes, offset: int = 0) -> State:
    """
    Convert 16 bytes to a fresh 4x4 AES state (column-major).

    Args:
        data: Buffer holding at least offset + 16 bytes
        offset: Position of the first byte of the block in data

    Returns:
        4x4 list of integers (0-255)
    """
    if len(data) - offset < BLOCK_SIZE:
        raise ValueError(f"Expected 16 bytes, got {max(len(data) - offset, 0)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for i in range(BLOCK_SIZE):
        state[i % 4][i // 4] = data[offset + i]
    return state


def state_to_bytes(state: State) -> bytes:
    """
    Convert a 4x4 AES state back to 16 bytes (column-major).
    """
    result = []
    for col in range(4):
        for row in range(4):
            result.append(state[row][col])
    return bytes(result)


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string to bytes."""
    return bytes.fromhex(hex_str)


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to lowercase hex string."""
    return data.hex()


def state_to_hex(state: State) -> str:
    """Convert state to hex string (via bytes)."""
    return bytes_to_hex(state_to_bytes(state))


def format_state_grid(state: State, indent: str = "  ") -> str:
    """
    Format state as a readable 4x4 grid.

    Returns multi-line string like:
      2b 28 ab 09
      7e ae f7 cf
      15 d2 15 4f
      16 a6 88 3c
    """
    lines = []
    for row in range(4):
        row_hex = [f"{state[row][col]:02x}" for col in range(4)]
        lines.append(indent + " ".join(row_hex))
    return "\n".join(lines)


def copy_state(state: State) -> State:
    """Deep copy a 4x4 state."""
    return [row[:] for row in state]
