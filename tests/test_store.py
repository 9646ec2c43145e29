# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.11
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_store.py

import io

import orjson
import pytest

from themesync.data.models import ColorScheme, ColorSchemeColor, FieldKind, RemoteSource, Theme
from themesync.storage.store import JsonFileThemeStore, MemoryThemeStore
from themesync.storage.uploads import FilesystemUploadCreator
from themesync.system.exceptions import UploadError


def _theme_with_content(name="Foo"):
    theme = Theme(name=name)
    theme.set_field("common", "scss", FieldKind.SCSS, "a {}")
    theme.set_field("common", "logo", FieldKind.THEME_UPLOAD_VAR, upload_id="u1")
    theme.color_schemes.append(ColorScheme(name="Dark", colors=[ColorSchemeColor(name="primary", hex="222222")]))
    theme.color_scheme_name = "Dark"
    return theme


class TestMemoryThemeStore:

    def test_save_assigns_ids(self):
        store = MemoryThemeStore()
        theme = store.save_theme(_theme_with_content())

        assert theme.id is not None
        assert all(f.id is not None for f in theme.fields)
        assert theme.color_schemes[0].id is not None
        assert theme.color_schemes[0].colors[0].id is not None
        assert store.get_field(theme.fields[0].id).value == "a {}"

    def test_records_are_copies(self):
        store = MemoryThemeStore()
        theme = store.save_theme(_theme_with_content())

        theme.name = "Changed"
        loaded = store.get_theme(theme.id)
        assert loaded.name == "Foo"
        loaded.fields.clear()
        assert len(store.get_theme(theme.id).fields) == 2

    def test_delete_fields(self):
        store = MemoryThemeStore()
        theme = store.save_theme(_theme_with_content())
        scss_id = theme.find_field("common", "scss", FieldKind.SCSS).id

        assert store.delete_fields({scss_id}) == 1
        assert store.get_field(scss_id) is None
        assert len(store.get_theme(theme.id).fields) == 1
        assert store.delete_fields(set()) == 0

    def test_delete_active_color_scheme_clears_selection(self):
        store = MemoryThemeStore()
        theme = store.save_theme(_theme_with_content())
        scheme_id = theme.color_schemes[0].id

        assert store.delete_color_schemes([scheme_id]) == 1
        stored = store.get_theme(theme.id)
        assert stored.color_schemes == []
        assert stored.color_scheme_name is None
        assert store.find_color_scheme(theme.id, "Dark") is None

    def test_remote_links(self):
        store = MemoryThemeStore()
        source = store.save_remote(RemoteSource(remote_url="https://example.org/t.git"))
        theme = _theme_with_content()
        theme.remote_source_id = source.id
        theme = store.save_theme(theme)
        store.save_theme(Theme(name="No remote"))

        assert store.remote_for_theme(theme.id).remote_url == "https://example.org/t.git"
        assert store.theme_for_remote(source.id).id == theme.id
        pairs = store.themes_with_remotes()
        assert [(t.id, s.id) for t, s in pairs] == [(theme.id, source.id)]

    def test_missing_records(self):
        store = MemoryThemeStore()
        assert store.get_theme(1) is None
        assert store.get_remote(1) is None
        assert store.remote_for_theme(1) is None
        assert store.theme_for_remote(1) is None
        assert store.find_theme_by_name("Foo") is None
        assert store.find_color_scheme(1, "Dark") is None


class TestJsonFileThemeStore:

    def test_roundtrip_through_file(self, tmp_path):
        path = tmp_path / "state" / "themes.json"
        store = JsonFileThemeStore(path)
        source = store.save_remote(RemoteSource(remote_url="https://example.org/t.git", local_version="abc"))
        theme = _theme_with_content()
        theme.remote_source_id = source.id
        theme = store.save_theme(theme)

        reopened = JsonFileThemeStore(path)
        assert reopened.get_theme(theme.id) == theme
        assert reopened.remote_for_theme(theme.id).local_version == "abc"

    def test_ids_continue_after_reload(self, tmp_path):
        path = tmp_path / "themes.json"
        first = JsonFileThemeStore(path).save_theme(Theme(name="One"))
        second = JsonFileThemeStore(path).save_theme(Theme(name="Two"))
        assert second.id > first.id

    def test_document_is_json(self, tmp_path):
        path = tmp_path / "themes.json"
        JsonFileThemeStore(path).save_theme(Theme(name="One"))
        data = orjson.loads(path.read_bytes())
        assert [t["name"] for t in data["themes"]] == ["One"]
        assert data["next_id"] == 2
        assert not path.with_suffix(".json.tmp").exists()


class TestFilesystemUploadCreator:

    def test_create_stores_by_content_hash(self, tmp_path):
        uploads = FilesystemUploadCreator(tmp_path / "uploads")
        upload_id = uploads.create(4, io.BytesIO(b"png bytes"), "Logo.PNG")

        stored = tmp_path / "uploads" / "4" / f"{upload_id}.png"
        assert stored.read_bytes() == b"png bytes"
        assert uploads.create(4, io.BytesIO(b"png bytes"), "other.png") == upload_id
        assert not list((tmp_path / "uploads" / "4").glob("*.tmp"))

    def test_create_failure_raises_upload_error(self, tmp_path):
        blocker = tmp_path / "uploads"
        blocker.write_text("not a directory")
        uploads = FilesystemUploadCreator(blocker)
        with pytest.raises(UploadError) as exc_info:
            uploads.create(1, io.BytesIO(b"x"), "logo.png")
        assert exc_info.value.asset_name == "logo.png"
