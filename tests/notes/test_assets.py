"""Tests for image reference resolution and scanning."""

from pathlib import Path

from notedraft.notes.assets import resolve_image_path, scan_images
from notedraft.notes.models import NoteImage, NoteRecord


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x89PNG")
    return path


class TestResolveImagePath:
    def test_remote_references_are_not_resolved(self, tmp_path: Path):
        assert resolve_image_path("https://example.com/a.png", tmp_path) is None
        assert resolve_image_path("http://example.com/a.png", tmp_path) is None

    def test_relative_reference_resolves_without_existence_check(self, tmp_path: Path):
        resolved = resolve_image_path("./missing.png", tmp_path)
        assert resolved == tmp_path / "missing.png"

    def test_parent_relative_reference_is_normalized(self, tmp_path: Path):
        note_dir = tmp_path / "notes"
        note_dir.mkdir()
        resolved = resolve_image_path("../shared/a.png", note_dir)
        assert resolved == tmp_path / "shared" / "a.png"

    def test_attachments_dir_takes_priority(self, tmp_path: Path):
        in_attachments = _touch(tmp_path / "attachments" / "a.png")
        _touch(tmp_path / "a.png")
        assert resolve_image_path("a.png", tmp_path) == in_attachments

    def test_falls_back_to_note_directory(self, tmp_path: Path):
        direct = _touch(tmp_path / "b.png")
        assert resolve_image_path("b.png", tmp_path) == direct

    def test_custom_attachments_dir(self, tmp_path: Path):
        image = _touch(tmp_path / "assets" / "c.png")
        assert resolve_image_path("c.png", tmp_path, attachments_dir="assets") == image

    def test_unknown_file_returns_none(self, tmp_path: Path):
        assert resolve_image_path("nope.png", tmp_path) is None


class TestScanImages:
    def test_standard_syntax_precedes_wiki_syntax(self, tmp_path: Path):
        _touch(tmp_path / "attachments" / "wiki.png")
        _touch(tmp_path / "attachments" / "std.png")
        note = tmp_path / "2026-01-17.md"
        text = "![[wiki.png]]\n\nText\n\n![diagram](std.png)\n"

        images = scan_images(text, note)

        assert [img.resolved_path.name for img in images] == ["std.png", "wiki.png"]
        assert images[0].alt_text == "diagram"
        assert images[0].reference == "![diagram](std.png)"
        assert images[1].alt_text == ""
        assert images[1].reference == "![[wiki.png]]"

    def test_left_to_right_within_each_syntax(self, tmp_path: Path):
        for name in ("one.png", "two.png", "three.png"):
            _touch(tmp_path / "attachments" / name)
        text = "![](three.png) ![](one.png) ![](two.png)"

        images = scan_images(text, tmp_path / "note.md")

        assert [img.resolved_path.name for img in images] == ["three.png", "one.png", "two.png"]

    def test_remote_and_missing_images_are_dropped(self, tmp_path: Path):
        _touch(tmp_path / "attachments" / "ok.png")
        text = (
            "![remote](https://cdn.example.com/x.png)\n"
            "![missing](./attachments/gone.png)\n"
            "![[absent.png]]\n"
            "![ok](./attachments/ok.png)\n"
        )

        images = scan_images(text, tmp_path / "note.md")

        assert len(images) == 1
        assert images[0].resolved_path == tmp_path / "attachments" / "ok.png"

    def test_every_resolved_path_exists(self, tmp_path: Path):
        _touch(tmp_path / "attachments" / "a.png")
        _touch(tmp_path / "b.png")
        images = scan_images("![a](a.png) ![[b.png]] ![c](c.png)", tmp_path / "n.md")
        assert images
        assert all(img.resolved_path.exists() for img in images)

    def test_no_images(self, tmp_path: Path):
        assert scan_images("Plain text only.", tmp_path / "n.md") == []


class TestCoverImage:
    def test_first_image_is_cover(self, tmp_path: Path):
        images = [
            NoteImage(reference="![](a.png)", resolved_path=tmp_path / "a.png"),
            NoteImage(reference="![](b.png)", resolved_path=tmp_path / "b.png"),
        ]
        assert NoteRecord(title="t", images=images).cover_image == tmp_path / "a.png"

    def test_empty_list_has_no_cover(self):
        assert NoteRecord(title="t").cover_image is None
