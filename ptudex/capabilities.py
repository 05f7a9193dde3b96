"""Canonical formatting for compound capabilities such as Naturewalk."""

import re
from typing import List, Sequence

NATUREWALK = "naturewalk"


def _title(text: str) -> str:
    return " ".join(word.capitalize() for word in text.split())


class CapabilityFormatter:
    """Rewrite ``Keyword (Item, Item)`` capabilities into one spelling.

    Extraction output spaces and capitalizes these inconsistently
    (``"Naturewalk(Forest,Grasslands)"``, ``"nATuRewaLk ( foREsT )"``). Tokens
    that do not mention the keyword are returned untouched, and text around
    the parenthesized list keeps its casing.
    """

    def __init__(self, keyword: str = NATUREWALK):
        self.keyword = keyword.lower()
        self._keyword_pattern = re.compile(re.escape(self.keyword), re.IGNORECASE)
        # an unclosed list runs to the end of the token
        self._items_pattern = re.compile(r"\s*\((?P<items>[^)]*)(?:\)|$)")

    def is_compound(self, capability: str) -> bool:
        return self.keyword in capability.lower()

    def _recase_keyword(self, text: str) -> str:
        return self._keyword_pattern.sub(self.keyword.capitalize(), text)

    def format_capability(self, capability: str) -> str:
        if not self.is_compound(capability):
            return capability

        match = self._items_pattern.search(capability)
        if not match:
            return self._recase_keyword(capability.strip())

        head = self._recase_keyword(capability[: match.start()].strip())
        items = [_title(item) for item in match.group("items").split(",")]
        items = [item for item in items if item]
        tail = capability[match.end():]
        return f"{head} ({', '.join(items)}){tail}".rstrip()

    def format(self, capabilities: Sequence[str]) -> List[str]:
        """Return a new list with every compound capability reformatted."""
        return [self.format_capability(capability) for capability in capabilities]
