"""Source location tracking for error messages and debugging.

Tokens carry only an absolute offset; SourceLocation turns an offset into
a 1-indexed line/column pair when an error needs to be reported.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All line/column positions are 1-indexed.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute offset in source buffer

    Examples:
            >>> SourceLocation.from_offset("class A\\n  {", 10)
        SourceLocation(lineno=2, col_offset=3, offset=10)
            >>> str(SourceLocation(2, 3))
            '2:3'

    """

    lineno: int
    col_offset: int
    offset: int = 0

    def __str__(self) -> str:
        """Format location for error messages ("10:5")."""
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(cls, source: str, offset: int) -> SourceLocation:
        """Compute line and column for an offset into source.

        Args:
            source: Complete source text
            offset: Absolute offset (clamped to the source bounds)

        Returns:
            SourceLocation for that offset
        """
        offset = max(0, min(offset, len(source)))
        lineno = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(lineno=lineno, col_offset=offset - line_start + 1, offset=offset)
