"""Character set policy deciding which characters get escaped."""

from enum import Enum
from typing import FrozenSet, Union

# Characters with special meaning in HTML markup and attribute values.
# The apostrophe renders as &apos;, which HTML5 defines but HTML4 does not.
SPECIAL_CHARS: FrozenSet[int] = frozenset(map(ord, "<>&\"'"))

ASCII_LIMIT = 0x80


class CharacterSet(Enum):
    """Selector for the characters the encoder escapes."""

    SPECIAL_CHARS = "special_chars"
    HTML = "html"
    NON_ASCII = "non_ascii"
    HTML_AND_NON_ASCII = "html_and_non_ascii"
    ALL = "all"
    NONE = "none"

    def contains(self, char: Union[str, int]) -> bool:
        """Check if a character (or code point) belongs to this set."""
        codepoint = char if isinstance(char, int) else ord(char)
        return should_escape(codepoint, self)

    @classmethod
    def from_name(cls, name: str) -> "CharacterSet":
        """Parse a set name such as ``non-ascii`` or ``HTML_AND_NON_ASCII``.

        Raises:
            ValueError: If the name matches no set
        """
        key = name.strip().lower().replace("-", "_")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown character set: {name}")


def should_escape(codepoint: int, charset: CharacterSet) -> bool:
    """Decide whether a code point is escaped under a character set.

    ``ALL`` covers every character: any scalar value can at least be written
    as a numeric reference.

    Args:
        codepoint: Unicode scalar value
        charset: Selected character set

    Returns:
        True if the encoder should replace the character with a reference
    """
    if charset is CharacterSet.NONE:
        return False
    if charset is CharacterSet.ALL:
        return True
    if charset is CharacterSet.NON_ASCII:
        return codepoint >= ASCII_LIMIT
    if charset is CharacterSet.HTML_AND_NON_ASCII:
        return codepoint >= ASCII_LIMIT or codepoint in SPECIAL_CHARS
    # SPECIAL_CHARS and HTML
    return codepoint in SPECIAL_CHARS
