"""
Uploads API - document uploads through presigned storage URLs.

An upload is three steps: ask the API for a presigned URL, PUT the bytes
straight to storage, then confirm so the API creates the document record.
"""

from typing import Any, Callable, Optional

import structlog

from haulbase.api.base import FileInput, ResourceApi, file_part
from haulbase.core.errors import ApiError

logger = structlog.get_logger(component="uploads")

DEFAULT_UPLOAD_CONTEXT = "load_document"


def _unwrap(body: Any) -> dict[str, Any]:
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]
    return body if isinstance(body, dict) else {}


class UploadsApi(ResourceApi):
    """Endpoints under /v1/uploads plus the storage PUT."""

    def get_presigned_url(
        self,
        file_name: str,
        mime_type: str,
        context: str = DEFAULT_UPLOAD_CONTEXT,
        load_id: Optional[str] = None,
        doc_type: Optional[str] = None,
        file_size: Optional[int] = None,
    ) -> Any:
        return self.client.post(
            "/v1/uploads/presign",
            {
                "fileName": file_name,
                "mimeType": mime_type,
                "context": context,
                "loadId": load_id,
                "docType": doc_type,
                "fileSize": file_size,
            },
        )

    def upload_to_storage(
        self,
        upload_url: str,
        content: bytes,
        content_type: str,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> None:
        """PUT the file to a presigned URL. No API auth headers are sent."""
        self.client.put_external(upload_url, content, content_type, on_progress)

    def confirm_upload(
        self,
        key: str,
        load_id: Optional[str] = None,
        doc_type: Optional[str] = None,
        file_name: Optional[str] = None,
        mime_type: Optional[str] = None,
        file_size: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> Any:
        return self.client.post(
            "/v1/uploads/confirm",
            {
                "key": key,
                "loadId": load_id,
                "type": doc_type,
                "fileName": file_name,
                "mimeType": mime_type,
                "fileSize": file_size,
                "notes": notes,
            },
        )

    def upload_document(
        self,
        file: FileInput,
        load_id: Optional[str] = None,
        doc_type: Optional[str] = None,
        notes: Optional[str] = None,
        context: str = DEFAULT_UPLOAD_CONTEXT,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> dict[str, Any]:
        """
        Run the full presign, upload and confirm flow for one file.

        Args:
            file: Path to the document, or a (name, bytes, content_type) triple
            load_id: Load the document belongs to
            doc_type: Document type (bol, pod, rate_con, ...)
            notes: Free-text notes stored with the document
            context: Upload context understood by the presign endpoint
            on_progress: Called with whole percentages while uploading

        Returns:
            The created document record

        Raises:
            ApiError: When any step fails or the presign response has no
                upload URL or key
        """
        name, content, content_type = file_part(file)
        size = len(content)

        presign = _unwrap(
            self.get_presigned_url(
                name, content_type, context, load_id=load_id, doc_type=doc_type, file_size=size
            )
        )
        if not presign.get("uploadUrl") or not presign.get("key"):
            raise ApiError("Upload URL missing from presign response")
        self.upload_to_storage(presign["uploadUrl"], content, content_type, on_progress)

        document = _unwrap(
            self.confirm_upload(
                presign["key"],
                load_id=load_id,
                doc_type=doc_type,
                file_name=name,
                mime_type=content_type,
                file_size=size,
                notes=notes,
            )
        )
        logger.info("document_uploaded", load_id=load_id, doc_type=doc_type, file_name=name)
        return document

    def get_document_url(self, document_id: str) -> Any:
        """Document record with a signed view URL."""
        return self.client.get(f"/v1/uploads/document/{document_id}/url")

    def delete_document(self, document_id: str) -> Any:
        return self.client.delete(f"/v1/uploads/document/{document_id}")

    def get_load_documents(self, load_id: str) -> Any:
        return self.client.get(f"/v1/uploads/load/{load_id}/documents")
