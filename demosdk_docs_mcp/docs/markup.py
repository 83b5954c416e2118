"""
Extraction rules for TypeDoc-generated HTML pages.

Every rule is a small named function over the raw page (or a fragment of it)
that returns an optional value. Callers compose them first-success-wins, so a
rule can be swapped without touching the others. No HTML parser is involved;
pages that lack a section simply yield nothing for it.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence

from .models import MethodDoc, ParameterDoc, PropertyDoc

MAX_DESCRIPTION_LENGTH = 500
MAX_METHOD_DESCRIPTION_LENGTH = 300
MAX_CONTENT_LENGTH = 5000

SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
TAG_RE = re.compile(r"<[^>]+>")
WHITESPACE_RE = re.compile(r"\s+")

# Order matters: &amp; is decoded after &lt;/&gt; so "&amp;lt;" stays "&lt;".
HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)

COMMENT_DIV_RE = re.compile(r'<div class="tsd-comment[^>]*>(.*?)</div>', re.DOTALL)
PANEL_COMMENT_RE = re.compile(r'<section class="tsd-panel[^>]*tsd-comment[^>]*>(.*?)</section>', re.DOTALL)
FIRST_PARAGRAPH_RE = re.compile(r"<p>(.*?)</p>")

MEMBER_SECTION_RE = re.compile(r'<section[^>]*class="[^"]*tsd-member[^"]*"[^>]*>(.*?)</section>', re.DOTALL)
MEMBER_HEADING_RE = re.compile(r"<h3[^>]*>(.*?)</h3>", re.DOTALL)
ID_ATTR_RE = re.compile(r'id="([^"]+)"')
SIGNATURE_RE = re.compile(r'<div[^>]*class="[^"]*tsd-signature[^"]*"[^>]*>(.*?)</div>', re.DOTALL)
MEMBER_COMMENT_RE = re.compile(r'<div[^>]*class="[^"]*tsd-comment[^"]*"[^>]*>(.*?)</div>', re.DOTALL)

PROPERTY_BLOCK_RE = re.compile(r'<div[^>]*class="[^"]*tsd-property[^"]*"[^>]*>(.*?)</div>', re.DOTALL)
PROPERTY_HEADING_RE = re.compile(r"<h4[^>]*>(.*?)</h4>", re.DOTALL)
TYPE_ANNOTATION_RE = re.compile(r":\s*<[^>]*>([^<]+)</")

PARAMETER_ITEM_RE = re.compile(r"<li[^>]*>(.*?)<span[^>]*>([^<]+)</span>[^:]*:[^<]*(.*?)</li>", re.DOTALL)
RETURNS_RE = re.compile(r"Returns[^:]*:[^<]*<[^>]*>([^<]+)</", re.IGNORECASE)

Rule = Callable[[str], Optional[str]]


def strip_markup(text: Optional[str]) -> str:
    """Remove tags, scripts and styles, unescape entities, collapse whitespace."""
    if not text:
        return ""
    stripped = SCRIPT_RE.sub("", text)
    stripped = STYLE_RE.sub("", stripped)
    stripped = TAG_RE.sub(" ", stripped)
    for entity, replacement in HTML_ENTITIES:
        stripped = stripped.replace(entity, replacement)
    return WHITESPACE_RE.sub(" ", stripped).strip()


def _group(pattern: re.Pattern[str], html: str) -> Optional[str]:
    match = pattern.search(html)
    if match and match.group(1):
        return match.group(1)
    return None


def first_match(html: str, rules: Sequence[Rule]) -> Optional[str]:
    for rule in rules:
        value = rule(html)
        if value:
            return value
    return None


def comment_block(html: str) -> Optional[str]:
    return _group(COMMENT_DIV_RE, html)


def panel_comment(html: str) -> Optional[str]:
    return _group(PANEL_COMMENT_RE, html)


def first_paragraph(html: str) -> Optional[str]:
    return _group(FIRST_PARAGRAPH_RE, html)


DESCRIPTION_RULES: Sequence[Rule] = (comment_block, panel_comment, first_paragraph)


def extract_description(html: str) -> str:
    raw = first_match(html, DESCRIPTION_RULES)
    if raw is None:
        return ""
    return strip_markup(raw)[:MAX_DESCRIPTION_LENGTH]


def member_heading(fragment: str) -> Optional[str]:
    return _group(MEMBER_HEADING_RE, fragment)


def id_attribute(fragment: str) -> Optional[str]:
    return _group(ID_ATTR_RE, fragment)


def property_heading(fragment: str) -> Optional[str]:
    return _group(PROPERTY_HEADING_RE, fragment)


def _is_member_name(name: str) -> bool:
    # Anchors such as "tsd-signature" are layout ids, not member names.
    return bool(name) and not name.startswith("tsd-")


def extract_methods(html: str) -> List[MethodDoc]:
    methods: List[MethodDoc] = []
    for match in MEMBER_SECTION_RE.finditer(html):
        fragment = match.group(1)
        raw_name = first_match(fragment, (member_heading, id_attribute))
        if raw_name is None:
            continue
        name = strip_markup(raw_name)
        if not _is_member_name(name):
            continue
        signature = _group(SIGNATURE_RE, fragment)
        description = _group(MEMBER_COMMENT_RE, fragment)
        methods.append(
            MethodDoc(
                name=name,
                signature=strip_markup(signature),
                description=strip_markup(description)[:MAX_METHOD_DESCRIPTION_LENGTH],
            )
        )
    return methods


def extract_type(fragment: str) -> str:
    return strip_markup(_group(TYPE_ANNOTATION_RE, fragment))


def extract_properties(html: str) -> List[PropertyDoc]:
    properties: List[PropertyDoc] = []
    for match in PROPERTY_BLOCK_RE.finditer(html):
        fragment = match.group(1)
        raw_name = first_match(fragment, (id_attribute, property_heading))
        if raw_name is None:
            continue
        name = strip_markup(raw_name)
        if _is_member_name(name):
            properties.append(PropertyDoc(name=name, type=extract_type(fragment)))
    return properties


def extract_parameters(html: str) -> List[ParameterDoc]:
    return [
        ParameterDoc(
            name=strip_markup(match.group(2)),
            type=strip_markup(match.group(3)),
            description=strip_markup(match.group(1)),
        )
        for match in PARAMETER_ITEM_RE.finditer(html)
    ]


def extract_return_type(html: str) -> str:
    return strip_markup(_group(RETURNS_RE, html))
