"""Template profiles and HTML document composition.

Each output format has a static HTML skeleton stored under ``templates/``.
A skeleton declares its profile name and version in a
``<meta name="markdraft-profile">`` tag and contains exactly one
``{{ content }}`` insertion point where the rendered fragment goes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .models import RenderedDocument, StyledDocument

TEMPLATE_DIR = Path(__file__).with_name("templates")
INSERTION_POINT = "{{ content }}"

_PROFILE_META_RE = re.compile(
    r'<meta\s+name="markdraft-profile"\s+content="(?P<name>[A-Za-z0-9_-]+)"'
    r'(?:\s+data-version="(?P<version>\d+)")?\s*/?>',
)


class TemplateError(RuntimeError):
    """Raised when a template asset is malformed or missing."""


@dataclass(frozen=True, slots=True)
class TemplateProfile:
    name: str
    version: int
    path: Path
    head: str
    tail: str

    def render(self, fragment: str) -> str:
        return f"{self.head}{fragment}{self.tail}"


def parse_profile(path: Path) -> TemplateProfile:
    source = path.read_text(encoding="utf-8")
    match = _PROFILE_META_RE.search(source)
    if not match:
        raise TemplateError(f"Template {path.name} does not declare a markdraft-profile")
    occurrences = source.count(INSERTION_POINT)
    if occurrences != 1:
        raise TemplateError(
            f"Template {path.name} must contain exactly one insertion point, found {occurrences}"
        )
    head, tail = source.split(INSERTION_POINT)
    return TemplateProfile(
        name=match.group("name"),
        version=int(match.group("version") or 1),
        path=path,
        head=head,
        tail=tail,
    )


def load_profiles(directory: Path | None = None) -> dict[str, TemplateProfile]:
    directory = directory or TEMPLATE_DIR
    profiles: dict[str, TemplateProfile] = {}
    for path in sorted(directory.glob("*.html")):
        profile = parse_profile(path)
        if profile.name in profiles:
            raise TemplateError(f"Duplicate template profile: {profile.name}")
        profiles[profile.name] = profile
    if not profiles:
        raise TemplateError(f"No template profiles found in {directory}")
    return profiles


class TemplateComposer:
    """Wraps rendered fragments in a named document skeleton."""

    def __init__(self, profiles: Mapping[str, TemplateProfile] | None = None) -> None:
        self._profiles = dict(profiles) if profiles is not None else load_profiles()

    @property
    def profiles(self) -> dict[str, TemplateProfile]:
        return dict(self._profiles)

    def get_profile(self, name: str) -> TemplateProfile:
        try:
            return self._profiles[name]
        except KeyError as exc:
            raise TemplateError(f"Unknown template profile: {name}") from exc

    def compose(self, profile: str, document: RenderedDocument) -> StyledDocument:
        template = self.get_profile(profile)
        return StyledDocument(complete_html=template.render(document.html_fragment), profile=template.name)


__all__ = [
    "INSERTION_POINT",
    "TEMPLATE_DIR",
    "TemplateComposer",
    "TemplateError",
    "TemplateProfile",
    "load_profiles",
    "parse_profile",
]
