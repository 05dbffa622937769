"""Convert Public Suffix List text into nested, section-keyed rule data."""

from __future__ import annotations

import re
from typing import Any

import idna

from .exceptions import InvalidListSource
from .models import Section
from .rule_tree import EXCEPTION_KEY, WILDCARD_KEY

_SECTION_MARKER_RE = re.compile(r"^//\s*===(?P<point>BEGIN|END)\s(?P<type>ICANN|PRIVATE)\sDOMAINS===")

_SECTIONS = {"ICANN": Section.ICANN, "PRIVATE": Section.PRIVATE}


def _section_marker(line: str, current: Section | None) -> Section | None:
    match = _SECTION_MARKER_RE.match(line)
    if match is None:
        return current
    if match["point"] == "BEGIN":
        return _SECTIONS[match["type"]]
    return None


def _to_ascii_label(label: str, rule: str) -> str:
    if label.isascii():
        return label.lower()
    try:
        return idna.encode(label, uts46=True).decode("ascii")
    except idna.IDNAError as exc:
        raise InvalidListSource.due_to_invalid_rule(rule) from exc


def _add_rule(tree: dict[str, Any], rule: str) -> None:
    labels = rule.split(".")
    exception = labels[0].startswith("!")
    if exception:
        labels[0] = labels[0][1:]
    if any(label == "" for label in labels):
        raise InvalidListSource.due_to_invalid_rule(rule)

    node = tree
    for label in reversed(labels):
        key = label if label == WILDCARD_KEY else _to_ascii_label(label, rule)
        node = node.setdefault(key, {})
    if exception:
        node[EXCEPTION_KEY] = {}


def convert(content: str) -> dict[str, dict[str, Any]]:
    """Parse PSL text into ``{"ICANN_DOMAINS": {...}, "PRIVATE_DOMAINS": {...}}``.

    Rules outside the BEGIN/END section markers are ignored. Only the first
    whitespace-separated token of a line is significant.
    """
    rules: dict[str, dict[str, Any]] = {Section.ICANN.value: {}, Section.PRIVATE.value: {}}
    section: Section | None = None
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("//"):
            section = _section_marker(line, section)
            continue
        if section is None:
            continue
        _add_rule(rules[section.value], line.split()[0])
    return rules
