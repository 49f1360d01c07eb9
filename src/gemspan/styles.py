"""Display styles and the theme mapping them to host faces.

The renderer speaks in Style values; a Theme translates each style into
whatever the host display layer calls it (a face name, a CSS class, a
terminal attribute). Themes are frozen and passed in at construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Style(Enum):
    """Logical display styles."""

    MARKUP = "markup"
    HEADING_1 = "heading-1"
    HEADING_2 = "heading-2"
    HEADING_3 = "heading-3"
    LIST_ITEM = "list-item"
    BLOCKQUOTE = "blockquote"
    LINK_URL = "link-url"
    LINK_LABEL = "link-label"
    LINK_BUTTON = "link-button"  # interactive affordance, layered on link text
    FENCE_ALT = "fence-alt"
    PRE_CONTENT = "pre-content"


HEADING_STYLES: tuple[Style, ...] = (Style.HEADING_1, Style.HEADING_2, Style.HEADING_3)


def _default_faces() -> Mapping[Style, str]:
    return MappingProxyType({style: f"gemini-{style.value}" for style in Style})


@dataclass(frozen=True, slots=True)
class Theme:
    """Immutable Style -> host face mapping.

    Styles missing from ``faces`` fall back to the default face name
    ``"gemini-<style>"``.

    Example:
        >>> theme = Theme.from_dict({"heading-1": "title"})
        >>> theme.face(Style.HEADING_1)
        'title'
        >>> theme.face(Style.MARKUP)
        'gemini-markup'
    """

    faces: Mapping[Style, str] = field(default_factory=_default_faces, hash=False)

    def face(self, style: Style) -> str:
        face = self.faces.get(style)
        return face if face is not None else f"gemini-{style.value}"

    @classmethod
    def from_dict(cls, faces: Mapping[str, str]) -> "Theme":
        """Create a Theme from ``{style value: face}``; unknown keys are ignored."""
        by_value = {style.value: style for style in Style}
        merged = dict(_default_faces())
        for key, face in faces.items():
            style = by_value.get(key)
            if style is not None:
                merged[style] = face
        return cls(MappingProxyType(merged))


DEFAULT_THEME = Theme()
