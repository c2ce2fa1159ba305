"""Document verification collaborators."""

from typing import Protocol, runtime_checkable

from eligibility.models.domain.subject import DocumentRecord


@runtime_checkable
class DocumentVerifier(Protocol):
    """Decides whether an attached document is authentic and verified."""

    def is_verified(self, document: DocumentRecord) -> bool: ...


class FlagDocumentVerifier:
    """
    Trusts the document's own verification flag.

    Stand-in until a credential verification backend is wired in; only an
    explicit True counts as verified.
    """

    def is_verified(self, document: DocumentRecord) -> bool:
        return document.verified is True
