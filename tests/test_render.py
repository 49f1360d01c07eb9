"""Tests for HighlightRenderer and themes."""

from gemspan import classify
from gemspan.config import EngineConfig
from gemspan.render import HighlightRenderer, StyleRun
from gemspan.styles import Style, Theme


def _styles(source: str, config: EngineConfig | None = None) -> list[tuple[int, int, Style]]:
    store = classify(source)
    runs = HighlightRenderer(config).render(store, 0, len(source))
    return [(r.start, r.end, r.style) for r in runs]


class TestStyles:
    """Group -> style mapping."""

    def test_heading_levels(self) -> None:
        source = "# A\n## B\n### C\n"
        assert _styles(source) == [
            (0, 1, Style.MARKUP),
            (2, 3, Style.HEADING_1),
            (4, 6, Style.MARKUP),
            (7, 8, Style.HEADING_2),
            (9, 12, Style.MARKUP),
            (13, 14, Style.HEADING_3),
        ]

    def test_list_and_quote(self) -> None:
        source = "* i\n> q\n"
        assert _styles(source) == [
            (0, 1, Style.MARKUP),
            (2, 3, Style.LIST_ITEM),
            (4, 5, Style.MARKUP),
            (6, 7, Style.BLOCKQUOTE),
        ]

    def test_link_styles_are_additive(self) -> None:
        source = "=> /a Label"
        assert _styles(source) == [
            (0, 11, Style.LINK_BUTTON),
            (0, 2, Style.MARKUP),
            (3, 5, Style.LINK_URL),
            (5, 11, Style.LINK_LABEL),
        ]

    def test_link_affordance_can_be_disabled(self) -> None:
        styles = {s for _, _, s in _styles("=> /a", EngineConfig(link_affordance=False))}
        assert Style.LINK_BUTTON not in styles
        assert Style.LINK_URL in styles

    def test_pre_text_is_exclusive(self) -> None:
        source = "```sh\n# x\n```\n"
        assert _styles(source) == [
            (0, 3, Style.MARKUP),
            (3, 5, Style.FENCE_ALT),
            (6, 10, Style.PRE_CONTENT),
            (10, 13, Style.MARKUP),
        ]


class TestViewport:
    """Runs are clipped to the viewport and recomputed per iteration."""

    def test_runs_clipped_to_viewport(self) -> None:
        source = "# Title\n"
        store = classify(source)
        runs = list(HighlightRenderer().render(store, 3, 5))
        assert [(r.start, r.end, r.style) for r in runs] == [(3, 5, Style.HEADING_1)]

    def test_spans_outside_viewport_skipped(self) -> None:
        source = "# A\n\n# B\n"
        store = classify(source)
        runs = list(HighlightRenderer().render(store, 5, 9))
        assert {r.start for r in runs} == {5, 7}

    def test_restartable(self) -> None:
        store = classify("# A\n")
        highlights = HighlightRenderer().render(store, 0, 4)
        assert list(highlights) == list(highlights)

    def test_empty_viewport(self) -> None:
        store = classify("# A\n")
        assert list(HighlightRenderer().render(store, 2, 2)) == []


class TestTheme:
    def test_default_faces(self) -> None:
        runs = list(HighlightRenderer().render(classify("# A"), 0, 3))
        assert runs[0] == StyleRun(0, 1, Style.MARKUP, "gemini-markup")
        assert runs[1].face == "gemini-heading-1"

    def test_custom_theme(self) -> None:
        theme = Theme.from_dict({"heading-1": "title", "bogus": "ignored"})
        assert theme.face(Style.HEADING_1) == "title"
        assert theme.face(Style.MARKUP) == "gemini-markup"
        config = EngineConfig(theme=theme)
        runs = list(HighlightRenderer(config).render(classify("# A"), 0, 3))
        assert runs[1].face == "title"

    def test_theme_with_partial_mapping_falls_back(self) -> None:
        theme = Theme({Style.MARKUP: "punct"})
        assert theme.face(Style.MARKUP) == "punct"
        assert theme.face(Style.PRE_CONTENT) == "gemini-pre-content"
