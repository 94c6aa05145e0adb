"""
Document data model - load paperwork types.
"""

from enum import Enum


class DocumentType(str, Enum):
    """Type of an uploaded load document."""

    BOL = "bol"
    POD = "pod"
    RATE_CON = "rate_con"
    INVOICE = "invoice"
    LUMPER = "lumper"
    SCALE_TICKET = "scale_ticket"
    RECEIPT = "receipt"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display label."""
        return DOCUMENT_TYPE_LABELS[self]


DOCUMENT_TYPE_LABELS = {
    DocumentType.BOL: "Bill of Lading",
    DocumentType.POD: "Proof of Delivery",
    DocumentType.RATE_CON: "Rate Confirmation",
    DocumentType.INVOICE: "Invoice",
    DocumentType.LUMPER: "Lumper Receipt",
    DocumentType.SCALE_TICKET: "Scale Ticket",
    DocumentType.RECEIPT: "Receipt",
    DocumentType.OTHER: "Other",
}


REQUIRED_FOR_INVOICE = (DocumentType.BOL, DocumentType.POD, DocumentType.RATE_CON)


def missing_invoice_documents(documents: list[dict]) -> list[DocumentType]:
    """Document types still needed before a load can be invoiced."""
    present = {doc.get("type") or doc.get("doc_type") for doc in documents}
    return [doc_type for doc_type in REQUIRED_FOR_INVOICE if doc_type.value not in present]
