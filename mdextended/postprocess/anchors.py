"""heading anchor id generation."""

import re
import unicodedata
from collections.abc import Iterable
from typing import Callable, Optional

from mdextended.core.config import FeatureConfig
from mdextended.postprocess.transliterate import transliterate

AnchorCallback = Callable[[str, FeatureConfig], str]

NON_WORD_PATTERN = re.compile(r"[\W_]+")


def sanitize(text: str, delimiter: str) -> str:
    """collapses runs of non-letter, non-digit characters into one delimiter."""
    text = NON_WORD_PATTERN.sub(delimiter, text)
    if delimiter:
        escaped = re.escape(delimiter)
        text = re.sub(f"(?:{escaped}){{2,}}", delimiter, text)
        text = re.sub(f"^(?:{escaped})+|(?:{escaped})+$", "", text)
    return text


class AnchorRegistry:
    """per-document record of issued anchor ids."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._used: set[str] = set()

    def reset(self) -> None:
        self._counts.clear()
        self._used.clear()

    def uniquify(self, base: str, blacklist: Iterable[str] = ()) -> str:
        """
        returns base, or base-N for the smallest free N.

        The first occurrence keeps the base unless it is blacklisted or
        already taken; later ones continue counting from the last suffix
        issued for that base.
        """
        blocked = set(blacklist)
        count = self._counts.get(base)
        n = 0 if count is None else count + 1
        while True:
            candidate = f"{base}-{n}" if n else base
            if candidate not in blocked and candidate not in self._used:
                break
            n += 1
        self._counts[base] = n
        self._used.add(candidate)
        return candidate


class AnchorIdGenerator:
    """turns heading text into unique HTML ids following the auto_anchors options."""

    def __init__(self, config: FeatureConfig) -> None:
        self.config = config
        self.registry = AnchorRegistry()
        self.callback: Optional[AnchorCallback] = None

    def reset(self) -> None:
        self.registry.reset()

    def create(self, text: str) -> Optional[str]:
        """
        returns an anchor id for text, or None when auto anchors are off.

        A registered callback replaces the whole pipeline.
        """
        if self.callback is not None:
            return self.callback(text, self.config)
        if not self.config.enabled("headings.auto_anchors.enabled"):
            return None

        delimiter = str(self.config.get("headings.auto_anchors.delimiter"))
        if self.config.get("headings.auto_anchors.lowercase"):
            text = text.lower()
        for search, replace in self.config.get(
            "headings.auto_anchors.replacements"
        ).items():
            text = text.replace(str(search), str(replace))
        text = unicodedata.normalize("NFC", text)
        if self.config.get("headings.auto_anchors.transliterate"):
            text = transliterate(text)
        text = sanitize(text, delimiter)
        if not text:
            return None
        return self.registry.uniquify(
            text, self.config.get("headings.auto_anchors.blacklist")
        )
