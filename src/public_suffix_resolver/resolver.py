"""Section policy on top of the rule tree.

A resolution is a pure function of (tree, domain, requested section): no
state is kept between calls and nothing is logged on this path.
"""

from __future__ import annotations

from typing import Any

from .domain import Domain
from .exceptions import UnresolvableDomain
from .models import PublicSuffix, ResolvedDomain, Section
from .rule_tree import RuleTree

_SECTION_ALIASES: dict[str, Section] = {
    "": Section.EFFECTIVE,
    Section.EFFECTIVE.value: Section.EFFECTIVE,
    Section.ICANN.value: Section.ICANN,
    Section.PRIVATE.value: Section.PRIVATE,
}


def validate_section(section: Section | str | None) -> Section:
    """Map a requested section onto :class:`Section`.

    ``None`` and ``""`` both mean the effective (either section) policy.
    """
    if section is None:
        return Section.EFFECTIVE
    if isinstance(section, Section):
        return section
    if isinstance(section, str) and section in _SECTION_ALIASES:
        return _SECTION_ALIASES[section]
    raise UnresolvableDomain.due_to_unsupported_section(section)


class SuffixResolver:
    """Resolve domains against one shared, read-only :class:`RuleTree`."""

    def __init__(
        self,
        tree: RuleTree,
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> None:
        self.tree = tree
        self.ascii_idna_option = ascii_idna_option
        self.unicode_idna_option = unicode_idna_option

    def validate_domain(self, domain: Any) -> Domain:
        """Convert ``domain`` and check it can carry a public suffix.

        Raises InvalidDomain when the value is not a domain at all, and
        UnresolvableDomain when it has fewer than two labels, no content, or
        a trailing dot.
        """
        domain = Domain.from_value(domain, self.ascii_idna_option, self.unicode_idna_option)
        if len(domain) < 2:
            raise UnresolvableDomain.due_to_unresolvable_domain(domain)
        if not domain.content:
            raise UnresolvableDomain.due_to_unresolvable_domain(domain)
        if domain.content.endswith("."):
            raise UnresolvableDomain.due_to_unresolvable_domain(domain)
        return domain

    def resolve(self, domain: Any, section: Section | str | None = Section.EFFECTIVE) -> ResolvedDomain:
        section = validate_section(section)
        domain = self.validate_domain(domain)
        ascii_domain = domain.to_ascii()
        matched = self.find_public_suffix(ascii_domain.labels, section)
        if len(ascii_domain) != len(domain):
            # IDNA mapping produced extra separators; only the ASCII form lines up
            return ResolvedDomain(domain=ascii_domain, suffix=matched)
        return ResolvedDomain(domain=domain, suffix=self._in_domain_form(domain, matched))

    def find_public_suffix(self, labels: tuple[str, ...], section: Section) -> PublicSuffix:
        """Apply the section policy to ASCII ``labels``.

        A PRIVATE match only wins when it is strictly longer than the ICANN
        one; on a tie ICANN stays authoritative.
        """
        icann = self._find_in_section(labels, Section.ICANN)
        if section is Section.ICANN:
            return icann

        private = self._find_in_section(labels, Section.PRIVATE)
        if len(private) > len(icann):
            return private

        if section is Section.PRIVATE:
            return PublicSuffix.from_unknown_section(labels[-1])

        return icann

    def _find_in_section(self, labels: tuple[str, ...], section: Section) -> PublicSuffix:
        matched = self.tree.lookup_in_section(labels, section)
        if not matched:
            return PublicSuffix.from_unknown_section(labels[-1])
        if section is Section.PRIVATE:
            return PublicSuffix.from_private_section(matched)
        return PublicSuffix.from_icann_section(matched)

    @staticmethod
    def _in_domain_form(domain: Domain, suffix: PublicSuffix) -> PublicSuffix:
        # Matching happens on the ASCII view; report labels as the caller wrote them
        labels = domain.labels[-len(suffix):]
        if labels == suffix.labels:
            return suffix
        return suffix.model_copy(update={"labels": labels})
