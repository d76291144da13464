"""Unit tests for diff and changelog rendering."""

from voidui.models import ChangelogChange, ChangelogEntry
from voidui.reports import unified_diff, render_diff, render_summary, render_changelog


class TestUnifiedDiff:
    """Test unified diff generation."""

    def test_identical_inputs(self):
        assert unified_diff("a\nb\n", "a\nb\n", "old", "new") == ""

    def test_trailing_newline_is_a_change(self):
        assert unified_diff("a", "a\n", "old", "new") != ""

    def test_only_lf_splits_lines(self):
        """Form feeds and line separators stay inside their line."""
        text = unified_diff("a\x0cb\n", "a\x0cB\n", "old", "new")
        assert "-a\x0cb" in text.split("\n")
        assert "+a\x0cB" in text.split("\n")

    def test_changed_line(self):
        text = unified_diff("a\nb\nc\n", "a\nB\nc\n", "your version", "v1.1.0")
        lines = text.split("\n")

        assert lines[0] == "--- your version"
        assert lines[1] == "+++ v1.1.0"
        assert lines[2].startswith("@@")
        assert "-b" in lines
        assert "+B" in lines

    def test_context_lines(self):
        old = "\n".join(str(i) for i in range(20))
        new = old.replace("10", "ten")

        text = unified_diff(old, new, "a", "b", context_lines=1)
        assert " 9" in text.split("\n")
        assert " 7" not in text.split("\n")


class TestRendering:
    """Test rich text renderers."""

    def test_render_diff_styles(self):
        text = render_diff("--- a\n+++ b\n@@ -1 +1 @@\n-old\n+new\n same")

        assert text.plain == "--- a\n+++ b\n@@ -1 +1 @@\n-old\n+new\n same"
        styles = {text.plain[span.start:span.end]: str(span.style) for span in text.spans}
        assert styles["-old"] == "red"
        assert styles["+new"] == "green"
        assert styles["@@ -1 +1 @@"] == "cyan"

    def test_render_summary(self):
        entry = ChangelogEntry(
            version="1.1.0",
            date="2025-01-20T10:00:00.000Z",
            changes=[ChangelogChange(type="added", description="Size prop")]
        )
        assert render_summary(entry).plain == "  + Added: Size prop"

    def test_render_changelog(self):
        entries = [
            ChangelogEntry(
                version=version,
                date="2025-01-20T10:00:00.000Z",
                changes=[ChangelogChange(type="fixed", description=f"Fix in {version}")],
                breaking=True if version == "2.0.0" else None
            )
            for version in ("1.0.0", "2.0.0")
        ]
        plain = render_changelog(entries).plain

        assert plain.index("Version 1.0.0") < plain.index("Version 2.0.0")
        assert "Version 2.0.0 (Jan 20, 2025) BREAKING" in plain
        assert "  * Fix in 1.0.0" in plain
