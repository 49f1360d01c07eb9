"""Engine configuration.

EngineConfig is an immutable value passed to a Document at construction;
the document hands it on to its renderer and scanner. There is no
process-wide configuration: two documents with different configs can be
used side by side from any thread.

Usage:
    config = EngineConfig(link_affordance=False)
    doc = Document("# Hello\\n", config=config)

    # From an external source (settings file, host preferences)
    config = EngineConfig.from_dict({"fence_search_limit": 65536})

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gemspan.styles import DEFAULT_THEME, Theme

if TYPE_CHECKING:
    from gemspan.fences import FenceHandlerRegistry


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine configuration.

    Attributes:
        theme: Style -> host face mapping used by the renderer
        link_affordance: Layer the LINK_BUTTON style over link lines
        fence_search_limit: How far past a region's end the scanner may
            look for a closing fence (None = to end of buffer)
        fence_handlers: Registry of host handlers for fenced content

    """

    theme: Theme = field(default=DEFAULT_THEME, hash=False)
    link_affordance: bool = True
    fence_search_limit: int | None = None
    fence_handlers: FenceHandlerRegistry | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if self.fence_search_limit is not None and self.fence_search_limit < 0:
            msg = f"fence_search_limit must be >= 0, got {self.fence_search_limit}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> EngineConfig:
        """Create EngineConfig from a dictionary.

        Only keys naming EngineConfig fields are used; unknown keys are
        silently ignored. A ``theme`` given as a plain dict is converted
        with ``Theme.from_dict``.

        Example:
            >>> config = EngineConfig.from_dict({
            ...     "link_affordance": False,
            ...     "theme": {"heading-1": "title"},
            ...     "unknown_key": "ignored",
            ... })
            >>> config.link_affordance
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        theme = filtered.get("theme")
        if isinstance(theme, dict):
            filtered["theme"] = Theme.from_dict(theme)
        return cls(**filtered)


DEFAULT_CONFIG = EngineConfig()
