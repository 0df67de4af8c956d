"""Tests for toolcards.shared.parsing.blocks — block extraction and sanitizing."""

from toolcards.shared.config import ParserConfig
from toolcards.shared.parsing.blocks import BlockExtractor, TextSanitizer

FENCE = "```"


def block(body: str) -> str:
    return f"{FENCE}tool-result\n{body}\n{FENCE}"


# ── BlockExtractor ──


class TestExtractComplete:
    def test_no_markers_returns_empty(self):
        assert BlockExtractor().extract("Just some prose.") == []

    def test_empty_text(self):
        assert BlockExtractor().extract("") == []

    def test_single_block_body(self):
        text = "Here you go:\n" + block("tool: A\nstatus: success") + "\nDone."
        bodies = BlockExtractor().extract(text)
        assert len(bodies) == 1
        assert bodies[0].strip() == "tool: A\nstatus: success"

    def test_adjacent_blocks_do_not_merge(self):
        text = block("tool: A") + block("tool: B")
        bodies = BlockExtractor().extract(text)
        assert [b.strip() for b in bodies] == ["tool: A", "tool: B"]

    def test_blocks_in_source_order(self):
        text = "one\n" + block("tool: First") + "\ntwo\n" + block("tool: Second") + "\nthree"
        segments = BlockExtractor().segments(text)
        assert [s.body.strip() for s in segments] == ["tool: First", "tool: Second"]
        assert segments[0].start < segments[1].start
        assert all(s.complete for s in segments)

    def test_other_fenced_blocks_are_ignored(self):
        text = f"{FENCE}python\nprint('hi')\n{FENCE}\n" + block("tool: A")
        bodies = BlockExtractor().extract(text)
        assert [b.strip() for b in bodies] == ["tool: A"]

    def test_label_requires_whitespace(self):
        assert BlockExtractor().extract(f"{FENCE}tool-resultx\nbody\n{FENCE}") == []


class TestExtractStreaming:
    def test_unterminated_block_is_returned(self):
        text = f"Looking that up.\n{FENCE}tool-result\ntool: Search\nstatus: succ"
        segments = BlockExtractor().segments(text)
        assert len(segments) == 1
        assert segments[0].complete is False
        assert segments[0].body == "tool: Search\nstatus: succ"

    def test_partial_ignored_when_complete_exists(self):
        text = block("tool: Done") + f"\n{FENCE}tool-result\ntool: Pending"
        bodies = BlockExtractor().extract(text)
        assert [b.strip() for b in bodies] == ["tool: Done"]

    def test_marker_without_body_whitespace_is_not_a_block(self):
        assert BlockExtractor().extract(f"text {FENCE}tool-result") == []


class TestCustomMarkers:
    def test_custom_label_and_fence(self):
        config = ParserConfig(fence="~~~", block_label="result")
        text = "~~~result\ntool: X\n~~~"
        assert [b.strip() for b in BlockExtractor(config).extract(text)] == ["tool: X"]

    def test_default_label_not_matched_by_custom_config(self):
        config = ParserConfig(block_label="result")
        assert BlockExtractor(config).extract(block("tool: X")) == []


# ── TextSanitizer ──


class TestHasBlock:
    def test_detects_start_marker(self):
        assert TextSanitizer().has_block(f"a {FENCE}tool-result\ntool: A")

    def test_plain_text(self):
        assert not TextSanitizer().has_block("nothing to see")

    def test_empty(self):
        assert not TextSanitizer().has_block("")


class TestStrip:
    def test_no_markers_unchanged(self):
        text = "Plain answer with `code` and a list:\n- a\n- b\n"
        assert TextSanitizer().strip(text) == text

    def test_removes_complete_blocks(self):
        text = "Before\n" + block("tool: A") + "\nAfter"
        assert TextSanitizer().strip(text) == "Before\n\nAfter"

    def test_removes_every_complete_block(self):
        text = "x" + block("tool: A") + "y" + block("tool: B") + "z"
        assert TextSanitizer().strip(text) == "xyz"

    def test_removes_trailing_partial_block(self):
        text = f"Working on it.\n{FENCE}tool-result\ntool: Search\n"
        assert TextSanitizer().strip(text) == "Working on it.\n"

    def test_removes_complete_and_trailing_partial(self):
        text = "a" + block("tool: A") + f"b{FENCE}tool-result\ntool: B"
        assert TextSanitizer().strip(text) == "ab"
