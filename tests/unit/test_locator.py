"""Unit tests for finding component files in a project."""

import json
from voidui.locator import candidate_paths, locate_component


class TestLocateComponent:
    """Test component file resolution."""

    def test_default_location(self, tmp_path):
        location = locate_component("button", tmp_path)

        assert not location.exists
        assert location.path == tmp_path / "components" / "ui" / "button.tsx"

    def test_fallback_dirs(self, tmp_path):
        target = tmp_path / "src" / "components" / "ui" / "button.tsx"
        target.parent.mkdir(parents=True)
        target.write_text("x")

        location = locate_component("button", tmp_path)
        assert location.exists
        assert location.path == target

    def test_components_json_alias(self, tmp_path):
        (tmp_path / "components.json").write_text(json.dumps({
            "aliases": {"ui": "@/shared/ui", "components": "@/components"}
        }))
        target = tmp_path / "shared" / "ui" / "card.tsx"
        target.parent.mkdir(parents=True)
        target.write_text("x")

        location = locate_component("card", tmp_path)
        assert location.exists
        assert location.path == target

    def test_alias_under_src(self, tmp_path):
        (tmp_path / "components.json").write_text(json.dumps({"aliases": {"ui": "@/widgets"}}))

        paths = candidate_paths("card", tmp_path)
        assert paths[0] == tmp_path / "widgets" / "card.tsx"
        assert paths[1] == tmp_path / "src" / "widgets" / "card.tsx"

    def test_unreadable_components_json_ignored(self, tmp_path):
        (tmp_path / "components.json").write_text("{ nope")

        paths = candidate_paths("card", tmp_path)
        assert paths[0] == tmp_path / "components" / "ui" / "card.tsx"

    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert locate_component("badge").path == tmp_path / "components" / "ui" / "badge.tsx"
