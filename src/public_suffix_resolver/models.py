from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, computed_field, field_validator, model_validator

from .domain import Domain
from .exceptions import InvalidDomain


class Section(StrEnum):
    ICANN = "ICANN_DOMAINS"
    PRIVATE = "PRIVATE_DOMAINS"
    # Request-only: best match from either section
    EFFECTIVE = "EFFECTIVE"


class PublicSuffix(BaseModel):
    """The labels a Public Suffix List section matched for a domain.

    ``section`` is ``None`` for the unknown fallback, i.e. the domain's
    rightmost label when no rule matched.
    """

    model_config = ConfigDict(frozen=True)

    labels: tuple[str, ...]
    section: Section | None = None

    @field_validator("section")
    @classmethod
    def _not_effective(cls, value: Section | None) -> Section | None:
        if value is Section.EFFECTIVE:
            raise ValueError("a matched suffix belongs to the ICANN or PRIVATE section, or none")
        return value

    @classmethod
    def from_icann_section(cls, labels: tuple[str, ...]) -> PublicSuffix:
        return cls(labels=labels, section=Section.ICANN)

    @classmethod
    def from_private_section(cls, labels: tuple[str, ...]) -> PublicSuffix:
        return cls(labels=labels, section=Section.PRIVATE)

    @classmethod
    def from_unknown_section(cls, label: str) -> PublicSuffix:
        return cls(labels=(label,), section=None)

    @computed_field
    @property
    def value(self) -> str:
        return ".".join(self.labels)

    @computed_field
    @property
    def is_known(self) -> bool:
        """True when a rule in the list matched, False for the fallback."""
        return self.section is not None

    @property
    def is_icann(self) -> bool:
        return self.section is Section.ICANN

    @property
    def is_private(self) -> bool:
        return self.section is Section.PRIVATE

    def __len__(self) -> int:
        return len(self.labels)

    def __str__(self) -> str:
        return self.value


class ResolvedDomain(BaseModel):
    """A domain together with its public suffix and the views derived from it."""

    model_config = ConfigDict(frozen=True)

    domain: Domain
    suffix: PublicSuffix | None = None

    @model_validator(mode="after")
    def _suffix_ends_domain(self) -> ResolvedDomain:
        if self.suffix is None:
            return self
        count = len(self.suffix)
        labels = self.domain.labels
        if count > len(labels) or (
            self.suffix.labels != labels[-count:]
            and self.suffix.labels != self.domain.to_ascii().labels[-count:]
        ):
            raise InvalidDomain.due_to_invalid_public_suffix(self.suffix.value)
        return self

    def _tail(self, extra: int) -> tuple[str, ...] | None:
        if self.suffix is None:
            return None
        count = len(self.suffix) + extra
        labels = self.domain.labels
        if len(labels) < count:
            return None
        return labels[-count:]

    @computed_field
    @property
    def registrable_domain(self) -> str | None:
        """Public suffix plus one label, e.g. ``example.co.uk``."""
        tail = self._tail(1)
        return ".".join(tail) if tail else None

    @computed_field
    @property
    def second_level_domain(self) -> str | None:
        tail = self._tail(1)
        return tail[0] if tail else None

    @computed_field
    @property
    def sub_domain(self) -> str | None:
        """Everything left of the registrable domain, if anything."""
        if self.registrable_domain is None:
            return None
        above = self.domain.labels[: -(len(self.suffix) + 1)]
        return ".".join(above) if above else None
