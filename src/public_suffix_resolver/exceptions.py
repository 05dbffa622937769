"""Exceptions raised while loading a Public Suffix List or resolving domains."""

from __future__ import annotations

from typing import Any


class PublicSuffixError(Exception):
    """Base class for all public_suffix_resolver exceptions."""


class InvalidDomain(PublicSuffixError):
    """Raised when a value cannot be converted into a domain name."""

    @classmethod
    def due_to_invalid_characters(cls, domain: str) -> InvalidDomain:
        return cls(f"The domain `{domain}` is invalid: it contains invalid characters")

    @classmethod
    def due_to_unsupported_type(cls, domain: str) -> InvalidDomain:
        return cls(f"The domain `{domain}` is invalid: this is an IPv4 host")

    @classmethod
    def due_to_invalid_label_length(cls, domain: str) -> InvalidDomain:
        return cls(f"The domain `{domain}` is invalid: a label or the name itself is too long")

    @classmethod
    def due_to_invalid_public_suffix(cls, public_suffix: str) -> InvalidDomain:
        return cls(f"The public suffix `{public_suffix}` is invalid")


class UnresolvableDomain(PublicSuffixError):
    """Raised when a domain cannot have a public suffix, or an unknown section is requested.

    Always raised before any rule lookup takes place.
    """

    def __init__(self, message: str, domain: Any | None = None) -> None:
        super().__init__(message)
        self.domain = domain

    @property
    def has_domain(self) -> bool:
        return self.domain is not None

    @classmethod
    def due_to_unresolvable_domain(cls, domain: Any) -> UnresolvableDomain:
        return cls(f"The domain `{domain}` can not contain a public suffix.", domain)

    @classmethod
    def due_to_unsupported_section(cls, section: object) -> UnresolvableDomain:
        return cls(f"`{section}` is an unknown Public Suffix List section.")


class InvalidListSource(PublicSuffixError):
    """Raised when Public Suffix List data can not be read or decoded."""

    @classmethod
    def due_to_invalid_path(cls, path: str) -> InvalidListSource:
        return cls(f"`{path}`: failed to load the public suffix list.")

    @classmethod
    def due_to_invalid_json(cls, reason: str) -> InvalidListSource:
        return cls(f"Failed to decode the public suffix list JSON data: {reason}")

    @classmethod
    def due_to_invalid_rule(cls, rule: str) -> InvalidListSource:
        return cls(f"The public suffix list rule `{rule}` is invalid.")
