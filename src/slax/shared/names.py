"""Qualified names and their compact string form.

Namespace URIs are never kept: a qualified name is reduced to
``"<prefix>:<local_part>"``. The colon is emitted even without a prefix, so an
unprefixed ``root`` becomes ``":root"``.
"""

from typing import NamedTuple


class QName(NamedTuple):
    """Qualified name as an optional prefix plus a local part."""

    local_part: str
    prefix: str = ""

    @classmethod
    def from_qualified(cls, qualified: str) -> "QName":
        """Split a lexical name such as ``cas:user`` at its first colon."""
        prefix, sep, local_part = qualified.partition(":")
        if not sep:
            return cls(qualified)
        return cls(local_part, prefix)

    def compact(self) -> str:
        """Return the compact ``prefix:local`` form."""
        return compact_qname(self)


def compact_qname(qname: QName) -> str:
    """Collapse a qualified name into one opaque string."""
    return f"{qname.prefix}:{qname.local_part}"
