"""Public Suffix List facade: load a list once, resolve domains against it."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from .converter import convert
from .domain import Domain
from .exceptions import InvalidDomain, InvalidListSource, UnresolvableDomain
from .models import PublicSuffix, ResolvedDomain, Section
from .resolver import SuffixResolver
from .rule_tree import RuleTree

log = structlog.get_logger()


class Rules:
    """A loaded Public Suffix List.

    The underlying :class:`RuleTree` is built in full before the instance
    exists and is never modified, so one instance can be shared freely.
    ``with_*_idna_option`` copies share the same tree.
    """

    def __init__(
        self,
        tree: RuleTree,
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> None:
        self._tree = tree
        self._resolver = SuffixResolver(tree, ascii_idna_option, unicode_idna_option)

    @classmethod
    def from_data(
        cls,
        data: Mapping[str, Any],
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> Rules:
        if not isinstance(data, Mapping):
            raise InvalidListSource.due_to_invalid_json("top-level value is not an object")
        tree = RuleTree.build(data)
        log.debug(
            "rule_tree_built",
            icann_nodes=tree.node_count(Section.ICANN),
            private_nodes=tree.node_count(Section.PRIVATE),
        )
        return cls(tree, ascii_idna_option, unicode_idna_option)

    @classmethod
    def from_string(
        cls,
        content: str,
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> Rules:
        """Build rules from Public Suffix List text (public_suffix_list.dat format)."""
        return cls.from_data(convert(content), ascii_idna_option, unicode_idna_option)

    @classmethod
    def from_json_string(
        cls,
        content: str,
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> Rules:
        """Build rules from the JSON produced by :meth:`to_json`."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidListSource.due_to_invalid_json(str(e)) from e
        return cls.from_data(data, ascii_idna_option, unicode_idna_option)

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> Rules:
        """Load rules from a file; ``.json`` files are read as a rule dump, anything else as PSL text."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidListSource.due_to_invalid_path(str(path)) from e

        if path.suffix == ".json":
            rules = cls.from_json_string(content, ascii_idna_option, unicode_idna_option)
        else:
            rules = cls.from_string(content, ascii_idna_option, unicode_idna_option)
        log.info(
            "public_suffix_list_loaded",
            path=str(path),
            icann_nodes=rules._tree.node_count(Section.ICANN),
            private_nodes=rules._tree.node_count(Section.PRIVATE),
        )
        return rules

    @property
    def tree(self) -> RuleTree:
        return self._tree

    @property
    def ascii_idna_option(self) -> int:
        return self._resolver.ascii_idna_option

    @property
    def unicode_idna_option(self) -> int:
        return self._resolver.unicode_idna_option

    def with_ascii_idna_option(self, option: int) -> Rules:
        if option == self.ascii_idna_option:
            return self
        return Rules(self._tree, option, self.unicode_idna_option)

    def with_unicode_idna_option(self, option: int) -> Rules:
        if option == self.unicode_idna_option:
            return self
        return Rules(self._tree, self.ascii_idna_option, option)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return self._tree.to_dict()

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    # Public suffix only

    def public_suffix(self, domain: Any, section: Section | str | None = Section.EFFECTIVE) -> PublicSuffix:
        """Return the public suffix of ``domain`` for the requested section.

        Raises UnresolvableDomain (bad section, fewer than two labels, empty
        or trailing-dot domain) and InvalidDomain (not a domain name).
        """
        return self._resolver.resolve(domain, section).suffix

    def cookie_effective_tld(self, domain: Any) -> PublicSuffix:
        return self.public_suffix(domain, Section.EFFECTIVE)

    def icann_effective_tld(self, domain: Any) -> PublicSuffix:
        return self.public_suffix(domain, Section.ICANN)

    def private_effective_tld(self, domain: Any) -> PublicSuffix:
        return self.public_suffix(domain, Section.PRIVATE)

    # Full resolution

    def resolve(self, domain: Any) -> ResolvedDomain:
        """Lenient cookie-domain resolution.

        Never raises for bad input: an unresolvable domain comes back without
        a suffix and an invalid one as the null domain.
        """
        try:
            return self.resolve_cookie_domain(domain)
        except UnresolvableDomain as e:
            return ResolvedDomain(domain=e.domain)
        except InvalidDomain:
            return ResolvedDomain(domain=Domain.from_null(self.ascii_idna_option, self.unicode_idna_option))

    def resolve_domain(self, domain: Any, section: Section | str | None = Section.EFFECTIVE) -> ResolvedDomain:
        return self._resolver.resolve(domain, section)

    def resolve_cookie_domain(self, domain: Any) -> ResolvedDomain:
        return self._resolver.resolve(domain, Section.EFFECTIVE)

    def resolve_icann_domain(self, domain: Any) -> ResolvedDomain:
        return self._resolver.resolve(domain, Section.ICANN)

    def resolve_private_domain(self, domain: Any) -> ResolvedDomain:
        return self._resolver.resolve(domain, Section.PRIVATE)
