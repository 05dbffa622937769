"""Immutable Public Suffix List rule tree and the label-walk lookup.

Rules are stored suffix-first: ``co.uk`` lives at ``uk -> co``. A wildcard
rule ``*.ck`` marks the ``ck`` node as ``wildcard``; an exception rule
``!www.ck`` marks the ``ck -> www`` node as ``exception``.

The tree is built once and never mutated, so any number of threads may call
:meth:`RuleTree.lookup_in_section` concurrently without locking.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .models import Section

WILDCARD_KEY = "*"
EXCEPTION_KEY = "!"

_EMPTY: Mapping[str, RuleNode] = MappingProxyType({})


@dataclass(frozen=True, slots=True, eq=False)
class RuleNode:
    """One label position in the tree.

    ``wildcard`` means any single label below this node matches.
    ``exception`` means the label that reached this node is carved out of
    the suffix.
    """

    children: Mapping[str, RuleNode] = field(default_factory=lambda: _EMPTY)
    wildcard: bool = False
    exception: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RuleNode:
        children = {}
        for label, sub in data.items():
            if label in (WILDCARD_KEY, EXCEPTION_KEY):
                continue
            children[label] = cls.from_mapping(sub if isinstance(sub, Mapping) else {})
        return cls(
            children=MappingProxyType(children) if children else _EMPTY,
            wildcard=WILDCARD_KEY in data,
            exception=EXCEPTION_KEY in data,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {label: child.to_dict() for label, child in self.children.items()}
        if self.wildcard:
            data[WILDCARD_KEY] = {}
        if self.exception:
            data[EXCEPTION_KEY] = {}
        return data

    def count_nodes(self) -> int:
        """Number of label nodes below this node, one per wildcard marker included.

        Intermediate labels count too: ``*.compute.amazonaws.com`` alone is 4.
        """
        total = 1 if self.wildcard else 0
        for child in self.children.values():
            total += 1 + child.count_nodes()
        return total


@dataclass(frozen=True, slots=True, eq=False)
class RuleTree:
    """The ICANN and PRIVATE rule roots of one loaded list."""

    icann: RuleNode = field(default_factory=RuleNode)
    private: RuleNode = field(default_factory=RuleNode)

    @classmethod
    def build(cls, rule_data: Mapping[str, Any]) -> RuleTree:
        """Build a tree from converter output keyed by section.

        Top-level keys other than the two section names are ignored.
        """
        return cls(
            icann=RuleNode.from_mapping(rule_data.get(Section.ICANN.value) or {}),
            private=RuleNode.from_mapping(rule_data.get(Section.PRIVATE.value) or {}),
        )

    def root(self, section: Section) -> RuleNode:
        if section is Section.ICANN:
            return self.icann
        if section is Section.PRIVATE:
            return self.private
        raise ValueError(f"no rule root for section {section!r}")

    def lookup_in_section(self, labels: Sequence[str], section: Section) -> tuple[str, ...]:
        """Return the labels of ``labels`` matched by the section's rules.

        ``labels`` are ASCII, left to right (``("www", "example", "com")``).
        The walk starts at the rightmost label. An empty tuple means no rule
        in this section matched.
        """
        node = self.root(section)
        matched: list[str] = []
        for label in reversed(labels):
            child = node.children.get(label)
            if child is not None and child.exception:
                break
            if node.wildcard:
                matched.append(label)
                break
            if child is None:
                break
            matched.append(label)
            node = child

        matched.reverse()
        return tuple(matched)

    def node_count(self, section: Section) -> int:
        return self.root(section).count_nodes()

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            Section.ICANN.value: self.icann.to_dict(),
            Section.PRIVATE.value: self.private.to_dict(),
        }
