# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.03
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/data/field_paths.py

"""
Mapping between package file paths and theme fields.

Each FileMatcher recognises one family of paths. Matching a path yields the
(target, name, kind) placement of the field the file's content belongs in;
canonical() goes the other way when a theme is written back to disk.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from themesync.data.models import FieldKind, ThemeField

BASE_TARGETS = ("common", "desktop", "mobile")
HTML_SLOTS = ("head_tag", "header", "after_header", "body_tag", "footer")


@dataclass(frozen=True)
class FieldPlacement:
    target: str
    name: str
    kind: FieldKind


@dataclass(frozen=True)
class FileMatcher:
    pattern: re.Pattern
    kind: FieldKind
    placement: Callable[[re.Match], tuple[str, str]]
    canonical: Callable[[ThemeField], str]
    owns: Callable[[ThemeField], bool]

    def match(self, path: str) -> Optional[FieldPlacement]:
        m = self.pattern.fullmatch(path)
        if m is None:
            return None
        target, name = self.placement(m)
        return FieldPlacement(target=target, name=name, kind=self.kind)


_targets = "|".join(BASE_TARGETS)

FILE_MATCHERS = (
    FileMatcher(
        pattern=re.compile(rf"(?P<target>{_targets})/(?P<name>{'|'.join(HTML_SLOTS)})\.html"),
        kind=FieldKind.HTML,
        placement=lambda m: (m["target"], m["name"]),
        canonical=lambda f: f"{f.target}/{f.name}.html",
        owns=lambda f: f.kind is FieldKind.HTML and f.target in BASE_TARGETS,
    ),
    FileMatcher(
        pattern=re.compile(rf"(?P<target>{_targets})/(?P=target)\.scss"),
        kind=FieldKind.SCSS,
        placement=lambda m: (m["target"], "scss"),
        canonical=lambda f: f"{f.target}/{f.target}.scss",
        owns=lambda f: f.kind is FieldKind.SCSS and f.target in BASE_TARGETS and f.name == "scss",
    ),
    FileMatcher(
        pattern=re.compile(r"common/embedded\.scss"),
        kind=FieldKind.SCSS,
        placement=lambda m: ("common", "embedded_scss"),
        canonical=lambda f: "common/embedded.scss",
        owns=lambda f: f.kind is FieldKind.SCSS and f.target == "common" and f.name == "embedded_scss",
    ),
    FileMatcher(
        pattern=re.compile(r"(?:scss|stylesheets)/(?P<name>.+)\.scss"),
        kind=FieldKind.SCSS,
        placement=lambda m: ("extra_scss", m["name"]),
        canonical=lambda f: f"stylesheets/{f.name}.scss",
        owns=lambda f: f.kind is FieldKind.SCSS and f.target == "extra_scss",
    ),
    FileMatcher(
        pattern=re.compile(r"javascripts/(?P<name>.+)"),
        kind=FieldKind.JS,
        placement=lambda m: ("extra_js", m["name"]),
        canonical=lambda f: f"javascripts/{f.name}",
        owns=lambda f: f.kind is FieldKind.JS and f.target == "extra_js",
    ),
    FileMatcher(
        pattern=re.compile(r"settings\.ya?ml"),
        kind=FieldKind.YAML,
        placement=lambda m: ("settings", "yaml"),
        canonical=lambda f: "settings.yml",
        owns=lambda f: f.kind is FieldKind.YAML and f.target == "settings",
    ),
    FileMatcher(
        pattern=re.compile(r"locales/(?P<name>[a-z]{2,3}(?:_[A-Za-z]{2,4})?)\.yml"),
        kind=FieldKind.YAML,
        placement=lambda m: ("translations", m["name"]),
        canonical=lambda f: f"locales/{f.name}.yml",
        owns=lambda f: f.kind is FieldKind.YAML and f.target == "translations",
    ),
)


def opts_from_file_path(path: str) -> Optional[FieldPlacement]:
    """Return the field placement encoded by a package path, or None."""
    for matcher in FILE_MATCHERS:
        placement = matcher.match(path)
        if placement is not None:
            return placement
    return None


def canonical_path(field: ThemeField) -> Optional[str]:
    """Package path a field is written to. Upload variables have none."""
    for matcher in FILE_MATCHERS:
        if matcher.owns(field):
            return matcher.canonical(field)
    return None
