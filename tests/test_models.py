# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.11
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_models.py

import pytest
from pydantic import ValidationError

from themesync.data.models import FieldKind, RemoteSource, Theme, ThemeMetadata


class TestThemeFields:

    def test_set_field_upserts_by_identity(self):
        theme = Theme(name="Foo")
        first = theme.set_field("common", "scss", FieldKind.SCSS, "a {}")
        second = theme.set_field("common", "scss", FieldKind.SCSS, "b {}")

        assert first is second
        assert len(theme.fields) == 1
        assert theme.fields[0].value == "b {}"

    def test_kinds_do_not_collide_across_categories(self):
        theme = Theme(name="Foo")
        theme.set_field("common", "header", FieldKind.HTML, "<div></div>")
        theme.set_field("common", "header", FieldKind.SCSS, "a {}")
        assert len(theme.fields) == 2

    def test_upload_var_identity_uses_var_category(self):
        theme = Theme(name="Foo")
        field = theme.set_field("common", "logo", FieldKind.THEME_UPLOAD_VAR, upload_id="u1")
        assert field.identity == ("common", "logo", "var")
        assert theme.find_field("common", "logo", FieldKind.THEME_UPLOAD_VAR) is field

    def test_is_new(self):
        assert Theme(name="Foo").is_new
        assert not Theme(id=3, name="Foo").is_new


@pytest.mark.parametrize("version", ["2.3.0", "10.0.12", "2.4.0.beta3"])
def test_valid_platform_versions(version):
    assert ThemeMetadata(minimum_platform_version=version).minimum_platform_version == version


@pytest.mark.parametrize("version", ["2.3", "v2.3.0", "2.3.0.rc1", "2.3.0.beta", "latest", ""])
def test_invalid_platform_versions(version):
    with pytest.raises(ValidationError):
        ThemeMetadata(maximum_platform_version=version)


def test_metadata_scalars_and_author_lists_become_text():
    metadata = ThemeMetadata(theme_version=1.2, authors=["a", "b"], about_url=None)
    assert metadata.theme_version == "1.2"
    assert metadata.authors == "a, b"
    assert metadata.about_url is None


def test_numeric_platform_version_is_still_checked():
    with pytest.raises(ValidationError):
        ThemeMetadata(minimum_platform_version=2.3)


class TestRemoteSource:

    def test_is_git(self):
        assert RemoteSource(remote_url="https://github.com/org/theme").is_git
        assert not RemoteSource(remote_url="").is_git
        assert not RemoteSource(remote_url="   ").is_git

    def test_commits_behind_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            RemoteSource(commits_behind=-1)

    def test_apply_metadata_replaces_all_properties(self):
        source = RemoteSource(authors="Old", license_url="https://old.example")
        source.apply_metadata(ThemeMetadata(authors="New", theme_version="2.0.0"))
        assert source.authors == "New"
        assert source.theme_version == "2.0.0"
        assert source.license_url is None

    @pytest.mark.parametrize("url,expected", [
        ("https://github.com/org/theme.git", "https://github.com/org/theme/compare/aaa...bbb"),
        ("https://github.com/org/theme", "https://github.com/org/theme/compare/aaa...bbb"),
        ("git@github.com:org/theme.git", "https://github.com/org/theme/compare/aaa...bbb"),
        ("https://gitlab.com/org/theme.git", None),
    ])
    def test_github_diff_link(self, url, expected):
        source = RemoteSource(remote_url=url, local_version="aaa", remote_version="bbb")
        assert source.github_diff_link == expected

    def test_no_diff_link_when_up_to_date(self):
        source = RemoteSource(remote_url="https://github.com/org/theme", local_version="aaa", remote_version="aaa")
        assert source.github_diff_link is None
