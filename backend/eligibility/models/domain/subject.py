"""Subject and document domain models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class DocumentRecord:
    """
    A verifiable document attached to a subject.

    Attributes:
        type: Proof type of the document (e.g. "aadhaar", "pan")
        verified: Verification flag supplied with the document
        attributes: Remaining document fields (e.g. expiryDate, number)
    """

    type: Optional[str] = None
    verified: Optional[bool] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        """Look up a document field by name; None if absent."""
        if name in self.attributes:
            return self.attributes[name]
        if name == "type":
            return self.type
        if name == "verified":
            return self.verified
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentRecord":
        """
        Build a document from its wire representation.

        Legacy documents carry their fields in a nested "vc" object; those
        are flattened into the attributes, with top-level fields taking
        precedence.
        """
        attributes: Dict[str, Any] = {}
        vc = data.get("vc")
        if isinstance(vc, dict):
            attributes.update(vc)
        attributes.update(
            {k: v for k, v in data.items() if k not in ("type", "verified", "vc")}
        )
        return cls(
            type=data.get("type"),
            verified=data.get("verified"),
            attributes=attributes,
        )


@dataclass
class Subject:
    """
    The profile being evaluated for eligibility.

    Attributes:
        attributes: Named profile attributes (age, income, class, ...)
        documents: Attached documents keyed by document key
        application_id: Optional identifier used to label batch results
        name: Optional display name used to label batch results
    """

    attributes: Dict[str, Any] = field(default_factory=dict)
    documents: Dict[str, Optional[DocumentRecord]] = field(default_factory=dict)
    application_id: Optional[str] = None
    name: Optional[str] = None

    def get(self, name: str) -> Any:
        """Look up a profile attribute; None if absent."""
        return self.attributes.get(name)

    def get_document(self, key: Optional[str]) -> Optional[DocumentRecord]:
        """Look up an attached document; None if absent."""
        if key is None:
            return None
        return self.documents.get(key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subject":
        """Build a subject from a flat profile mapping with optional documents."""
        documents: Dict[str, Optional[DocumentRecord]] = {}
        for key, doc in (data.get("documents") or {}).items():
            if isinstance(doc, DocumentRecord):
                documents[key] = doc
            elif isinstance(doc, dict):
                documents[key] = DocumentRecord.from_dict(doc)
            else:
                # Empty strings and nulls count as missing documents
                documents[key] = None

        attributes = {k: v for k, v in data.items() if k != "documents"}
        application_id = data.get("applicationId")
        return cls(
            attributes=attributes,
            documents=documents,
            application_id=str(application_id) if application_id is not None else None,
            name=data.get("name"),
        )
