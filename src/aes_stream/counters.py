"""
Counters for round and operation accounting.
"""


class RoundCounter:
    """
    Tracks the number of rounds executed during one block encryption.
    """

    def __init__(self):
        self._count = 0

    def increment(self, amount: int = 1) -> None:
        """Add rounds to the counter."""
        self._count += amount

    def reset(self) -> None:
        """Reset counter to zero."""
        self._count = 0

    @property
    def count(self) -> int:
        """Get current round count."""
        return self._count

    def __repr__(self) -> str:
        return f"RoundCounter(count={self._count})"


class OperationCounter:
    """
    Tracks how many times each round operation ran.

    Used to check the cipher's structure: one key-only round, nine full
    rounds, and a final round without MixColumns.
    """

    def __init__(self):
        self._by_operation: dict[str, int] = {}

    def add(self, operation: str, amount: int = 1) -> None:
        """Record that an operation was executed."""
        self._by_operation[operation] = self._by_operation.get(operation, 0) + amount

    def get(self, operation: str) -> int:
        """Count for a single operation (0 if it never ran)."""
        return self._by_operation.get(operation, 0)

    def reset(self) -> None:
        """Reset all counts."""
        self._by_operation.clear()

    @property
    def by_operation(self) -> dict[str, int]:
        """Copy of the per-operation counts."""
        return dict(self._by_operation)

    @property
    def total(self) -> int:
        return sum(self._by_operation.values())

    def summary(self) -> str:
        """Return a summary string of operation counts."""
        lines = [f"Total operations: {self.total}"]
        for op in sorted(self._by_operation.keys()):
            lines.append(f"  {op}: {self._by_operation[op]}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"OperationCounter(total={self.total})"
