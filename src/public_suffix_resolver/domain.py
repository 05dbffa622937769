"""Canonical domain value: the one place loosely-typed input becomes labels.

Rule lookups and result assembly downstream of :class:`Domain` only
ever see its label tuple and ASCII view.
"""

from __future__ import annotations

import ipaddress
import re
from enum import IntFlag
from typing import Any

import idna
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .exceptions import InvalidDomain

# RFC 3986 reg-name characters, minus the label separator handled separately
_REG_NAME_RE = re.compile(r"^[a-z0-9\-._~!$&'()*+,;=%]*$")
_UNICODE_DOTS_RE = re.compile("[。．｡]")

# UTS #46 deviation characters; idna ignores transitional processing since 3.10
_TRANSITIONAL_MAP = str.maketrans({"ß": "ss", "ς": "σ", "\u200c": None, "\u200d": None})

_MAX_LABEL_LENGTH = 63
_MAX_NAME_LENGTH = 253


class IdnaOption(IntFlag):
    """Flags accepted by the ASCII and Unicode conversion options.

    Values mirror the usual IDNA_* constants so existing bitmasks can be
    passed through unchanged.
    """

    DEFAULT = 0
    USE_STD3_RULES = 2
    CHECK_BIDI = 4
    TRANSITIONAL = 64


def _idna_kwargs(option: int) -> dict[str, bool]:
    return {"uts46": True, "std3_rules": IdnaOption.USE_STD3_RULES in IdnaOption(option)}


class Domain(BaseModel):
    """A normalized domain name and its ASCII/Unicode conversion options.

    ``content`` is kept as rendered (lowercased, trailing dot included) so
    callers can tell ``com.`` apart from ``com``. ``None`` is the null domain.
    """

    model_config = ConfigDict(frozen=True)

    content: str | None = None
    ascii_idna_option: int = 0
    unicode_idna_option: int = 0

    @field_validator("content", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, Domain):
            return value.content
        domain = _UNICODE_DOTS_RE.sub(".", str(value).strip().lower())
        if domain == "":
            return domain

        try:
            ipaddress.IPv4Address(domain)
        except ValueError:
            pass
        else:
            raise InvalidDomain.due_to_unsupported_type(domain)

        labels = domain.split(".")
        if any(label == "" for label in labels[:-1]):
            raise InvalidDomain.due_to_invalid_characters(domain)
        if domain.isascii() and not _REG_NAME_RE.match(domain):
            raise InvalidDomain.due_to_invalid_characters(domain)
        return domain

    @model_validator(mode="after")
    def _check_convertible(self) -> Domain:
        ascii_content = self._ascii_content()
        if ascii_content is not None:
            if any(len(label) > _MAX_LABEL_LENGTH for label in ascii_content.split(".")):
                raise InvalidDomain.due_to_invalid_label_length(ascii_content)
            if len(ascii_content.rstrip(".")) > _MAX_NAME_LENGTH:
                raise InvalidDomain.due_to_invalid_label_length(ascii_content)
        return self

    @classmethod
    def from_value(
        cls,
        value: Any,
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> Domain:
        """Build a Domain from a string, None, a Domain or anything with a ``domain`` attribute."""
        if isinstance(value, Domain):
            return value.with_options(ascii_idna_option, unicode_idna_option)
        inner = getattr(value, "domain", None)
        if isinstance(inner, Domain):
            return inner.with_options(ascii_idna_option, unicode_idna_option)
        return cls(
            content=value,
            ascii_idna_option=ascii_idna_option,
            unicode_idna_option=unicode_idna_option,
        )

    @classmethod
    def from_null(
        cls,
        ascii_idna_option: int = 0,
        unicode_idna_option: int = 0,
    ) -> Domain:
        return cls(content=None, ascii_idna_option=ascii_idna_option, unicode_idna_option=unicode_idna_option)

    @property
    def labels(self) -> tuple[str, ...]:
        """Labels left to right, e.g. ``("www", "example", "com")``."""
        if self.content is None:
            return ()
        return tuple(self.content.split("."))

    def __len__(self) -> int:
        return len(self.labels)

    def __str__(self) -> str:
        return self.content or ""

    @property
    def is_ascii(self) -> bool:
        return self.content is None or self.content.isascii()

    def with_options(self, ascii_idna_option: int, unicode_idna_option: int) -> Domain:
        if (ascii_idna_option, unicode_idna_option) == (self.ascii_idna_option, self.unicode_idna_option):
            return self
        return Domain(
            content=self.content,
            ascii_idna_option=ascii_idna_option,
            unicode_idna_option=unicode_idna_option,
        )

    def _ascii_content(self) -> str | None:
        if self.content is None or self.content.isascii():
            return self.content
        content = self.content
        if IdnaOption.TRANSITIONAL in IdnaOption(self.ascii_idna_option):
            content = content.translate(_TRANSITIONAL_MAP)
        try:
            return idna.encode(content, **_idna_kwargs(self.ascii_idna_option)).decode("ascii")
        except idna.IDNAError as exc:
            raise InvalidDomain.due_to_invalid_characters(self.content) from exc

    def to_ascii(self) -> Domain:
        content = self._ascii_content()
        if content == self.content:
            return self
        return self.model_copy(update={"content": content})

    def to_unicode(self) -> Domain:
        if self.content is None or not any(label.startswith("xn--") for label in self.labels):
            return self
        try:
            content = idna.decode(self.content, **_idna_kwargs(self.unicode_idna_option))
        except idna.IDNAError as exc:
            raise InvalidDomain.due_to_invalid_characters(self.content) from exc
        return self.model_copy(update={"content": content})
