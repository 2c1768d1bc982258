"""
Field extraction rule tables.

Each source kind (an external HTML page, the local layout configuration) is
described by a ``SourceProfile``: for every field an ordered tuple of
``PatternRule`` objects plus the fallback values used when nothing matches.
Profiles are built once at import time and shared read-only.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Pattern, Tuple


@dataclass(frozen=True)
class PatternRule:
    """
    A single matcher for one field.

    ``groups`` lists the capture groups that may hold the value (alternative
    quoting styles or attribute orders); the first non-empty one is used.
    An ``override`` rule replaces a value set by an earlier rule.
    """
    pattern: Pattern
    groups: Tuple[int, ...] = (1,)
    override: bool = False

    def match(self, text: str) -> Optional[str]:
        found = self.pattern.search(text)
        if not found:
            return None
        for group in self.groups:
            value = found.group(group)
            if value:
                return value
        return None


@dataclass(frozen=True)
class SourceProfile:
    name: str
    rules: Mapping[str, Tuple[PatternRule, ...]]
    defaults: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    cleanup_fields: frozenset = frozenset()


# --- External HTML ---

_QUOTED_VALUE = r'''(?:"([^"]+)"|'([^']+)')'''


def _tag_rule(tag: str, key_attrs: str, key_value: str, value_attr: str, override: bool = False) -> PatternRule:
    """Match ``<tag key_attr="key_value" value_attr="...">`` in either attribute order"""
    key = rf'''\s(?:{key_attrs})\s*=\s*["']{key_value}["']'''
    value = rf'''\s{value_attr}\s*=\s*{_QUOTED_VALUE}'''
    pattern = (
        rf'''<{tag}\b[^>]*?{key}[^>]*?{value}'''
        rf'''|<{tag}\b[^>]*?{value}[^>]*?{key}'''
    )
    return PatternRule(re.compile(pattern, re.IGNORECASE), groups=(1, 2, 3, 4), override=override)


def meta_rule(key: str, override: bool = False) -> PatternRule:
    """Rule for ``<meta property|name="key" content="...">``"""
    return _tag_rule("meta", "property|name", re.escape(key), "content", override=override)


TITLE_TAG_RULE = PatternRule(re.compile(r"<title\b[^>]*>([^<]+)</title>", re.IGNORECASE))
ICON_LINK_RULE = _tag_rule("link", "rel", r"(?:shortcut\s+)?icon", "href")

EXTERNAL_HTML_PROFILE = SourceProfile(
    name="external-html",
    rules=MappingProxyType({
        "title": (
            TITLE_TAG_RULE,
            meta_rule("og:title", override=True),
        ),
        "description": (
            meta_rule("description"),
            meta_rule("og:description", override=True),
        ),
        "image": (
            meta_rule("og:image"),
            meta_rule("twitter:image"),
        ),
        "favicon": (
            ICON_LINK_RULE,
        ),
    }),
)


# --- Local layout configuration ---

_LITERAL = r'''['"]([^'"]+)['"]'''
_SITE_URL_TEMPLATE = r'''`(\$\{siteUrl\}[^`]+)`'''


def key_rule(key: str, value: str = _LITERAL, groups: Tuple[int, ...] = (1,)) -> PatternRule:
    """Rule for ``key: <value>`` inside the metadata export"""
    return PatternRule(re.compile(rf"{key}:\s*{value}"), groups=groups)


LOCAL_CONFIG_PROFILE = SourceProfile(
    name="local-config",
    rules=MappingProxyType({
        "site_url": (
            PatternRule(re.compile(rf"const\s+siteUrl\s*=\s*{_LITERAL}")),
        ),
        "title": (key_rule("title"),),
        "description": (key_rule("description"),),
        "image": (
            key_rule("url", _SITE_URL_TEMPLATE),
            key_rule(r"images:\s*\[\s*\{\s*url"),
        ),
        "og_image_width": (key_rule("width", r"(\d+)"),),
        "og_image_height": (key_rule("height", r"(\d+)"),),
        "og_image_alt": (key_rule("alt"),),
        "favicon": (
            key_rule("icon"),
            key_rule(r"icon:\s*\[\s*\{\s*url"),
        ),
        "video": (
            key_rule(r"videos:\s*\[\s*\{\s*url", rf"(?:{_LITERAL}|{_SITE_URL_TEMPLATE})", groups=(1, 2)),
        ),
    }),
    defaults=MappingProxyType({
        "title": "Start Page",
        "description": "",
        "site_url": "https://yourdomain.com",
        "og_image_width": 1200,
        "og_image_height": 630,
        "og_image_alt": "Start Page Preview",
        "video": "",
    }),
    cleanup_fields=frozenset({"image", "favicon", "video"}),
)
