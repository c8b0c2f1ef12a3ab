"""
Context discovery — source reference resolution

Turns the repository annotations declared on a catalog entity into a single
normalized source URL plus, when the URL points at GitHub, its org/repo/path.

Supported annotation formats, in priority order:
1. ``github.com/project-slug: <owner>/<repo>``
2. ``backstage.io/source-location: url:<url>`` (or ``github:<url>``)
3. a bare URL containing ``github.com`` in the source-location annotation or
   one of the other repository annotations (``REPOSITORY_URL_ANNOTATIONS``);
   scheme-less ``github.com/<org>/<repo>`` values get ``https://`` prepended

Resolution never raises: an entity without a recognizable annotation has no
source reference, and a URL the GitHub pattern cannot parse keeps ``url`` but
leaves ``org``/``repo`` empty.
"""

from __future__ import annotations

import re
from typing import Callable, List, Mapping, Optional

from .types import SourceReference

PROJECT_SLUG_ANNOTATION = "github.com/project-slug"
SOURCE_LOCATION_ANNOTATION = "backstage.io/source-location"

# Annotations that name the repository itself. Link annotations such as
# backstage.io/view-url point at single files and are never a source.
REPOSITORY_URL_ANNOTATIONS = (
    SOURCE_LOCATION_ANNOTATION,
    "backstage.io/source-url",
    "github.com/repository-url",
)

GITHUB_BASE_URL = "https://github.com"

_SOURCE_LOCATION_PREFIXES = ("url:", "github:")
_URL_SCHEMES = ("http://", "https://", "git@", "ssh://", "git://")
_SCHEMELESS_GITHUB_PREFIXES = ("github.com/", "www.github.com/")

_SLUG_RE = re.compile(r"^[^/\s]+/[^/\s]+$")
_GITHUB_URL_RE = re.compile(r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?(?:$|[?#/])")
_TREE_PATH_RE = re.compile(r"/tree/[^/]+/([^?#]+)")


def _from_project_slug(annotations: Mapping[str, str]) -> Optional[str]:
    slug = (annotations.get(PROJECT_SLUG_ANNOTATION) or "").strip()
    if slug and _SLUG_RE.match(slug):
        return f"{GITHUB_BASE_URL}/{slug}"
    return None


def _from_source_location(annotations: Mapping[str, str]) -> Optional[str]:
    location = (annotations.get(SOURCE_LOCATION_ANNOTATION) or "").strip()
    for prefix in _SOURCE_LOCATION_PREFIXES:
        if location.startswith(prefix):
            remainder = location[len(prefix):].strip()
            return remainder or None
    return None


def _normalize_bare_github_url(value: str) -> Optional[str]:
    if not value or "github.com" not in value or any(c.isspace() for c in value):
        return None
    if value.startswith(_URL_SCHEMES):
        return value
    if value.startswith(_SCHEMELESS_GITHUB_PREFIXES):
        return f"https://{value}"
    return None


def _from_bare_url(annotations: Mapping[str, str]) -> Optional[str]:
    for key in REPOSITORY_URL_ANNOTATIONS:
        url = _normalize_bare_github_url((annotations.get(key) or "").strip())
        if url:
            return url
    return None


_RESOLVERS: List[Callable[[Mapping[str, str]], Optional[str]]] = [
    _from_project_slug,
    _from_source_location,
    _from_bare_url,
]


def resolve_source_url(annotations: Optional[Mapping[str, str]]) -> Optional[str]:
    """Return the first URL produced by the resolver chain, or None."""
    if not annotations:
        return None
    for resolver in _RESOLVERS:
        url = resolver(annotations)
        if url:
            return url
    return None


def parse_github_url(url: Optional[str]) -> SourceReference:
    """Split a GitHub URL into org/repo/path. Unparseable URLs keep only ``url``."""
    if not url:
        return SourceReference()

    match = _GITHUB_URL_RE.search(url)
    if not match:
        return SourceReference(url=url)

    path = None
    tree = _TREE_PATH_RE.search(url)
    if tree:
        path = tree.group(1).strip("/") or None

    return SourceReference(url=url, org=match.group(1), repo=match.group(2), path=path)


def resolve_source_reference(annotations: Optional[Mapping[str, str]]) -> SourceReference:
    return parse_github_url(resolve_source_url(annotations))
