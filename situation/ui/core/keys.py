"""
Key Events

Terminal-independent key representation consumed by the input dispatcher.
"""

from dataclasses import dataclass
from typing import Optional

from ...models.enums import KeyCode


@dataclass(frozen=True)
class KeyEvent:
    """One key press. ``char`` is set only for ``KeyCode.CHAR``."""

    code: KeyCode
    char: Optional[str] = None
    alt: bool = False

    @classmethod
    def of(cls, char: str, alt: bool = False) -> "KeyEvent":
        """Build a printable character event."""
        return cls(KeyCode.CHAR, char=char, alt=alt)

    def is_char(self, char: str) -> bool:
        return self.code == KeyCode.CHAR and self.char == char and not self.alt
