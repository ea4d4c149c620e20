"""
Tag grammar result models

Type-safe structures returned by the tag recognizers in lib/grammar.py.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class TagFlavor(Enum):
    """
    Flavors of the tag recognizers

    BLOCK recognizers look at a whole (stripped) line, INLINE recognizers
    look at the text starting at the inline cursor.
    """
    BLOCK = "block"
    INLINE = "inline"


@dataclass
class TagMatch:
    """
    Result of testing a text slice against a tag pattern

    Attributes:
        status: Whether the slice begins with the requested construct
        name: Tag name (e.g., "Foo", "Foo.Bar", "div"); None for brace
              expressions and failed matches
        end: Number of characters consumed from the start of the slice

    Example:
        For the inline slice '<Foo a="1">hello</Foo>':
        TagMatch(status=True, name="Foo", end=11)
    """
    status: bool
    name: Optional[str] = None
    end: int = 0


NO_MATCH = TagMatch(status=False)
