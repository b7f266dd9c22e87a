"""Document loader streaming text objects out of OCI Object Storage."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from langchain_core.documents import Document

if TYPE_CHECKING:
    from oci.object_storage import ObjectStorageClient

logger = logging.getLogger(__name__)


class OCIDocumentLoader:
    """Load documents from an Object Storage namespace.

    Parameters
    ----------
    client:
        An authenticated ``ObjectStorageClient``.
    namespace:
        The tenancy's Object Storage namespace.
    encoding:
        Text encoding of the stored objects.
    """

    def __init__(self, client: ObjectStorageClient, namespace: str, *, encoding: str = "utf-8") -> None:
        self._client = client
        self.namespace = namespace
        self.encoding = encoding

    def list_object_names(self, bucket_name: str, object_prefix: str = "") -> Iterator[str]:
        """Yield the names of all objects under *object_prefix*, page by page."""
        start: str | None = None
        while True:
            kwargs: dict[str, str] = {}
            if object_prefix:
                kwargs["prefix"] = object_prefix
            if start:
                kwargs["start"] = start
            response = self._client.list_objects(self.namespace, bucket_name, **kwargs)
            for summary in response.data.objects:
                # Zero-byte "folder" markers created by the console.
                if summary.name.endswith("/"):
                    continue
                yield summary.name
            start = response.data.next_start_with
            if not start:
                return

    def load_object(self, bucket_name: str, object_name: str) -> Document:
        """Download a single object and wrap it in a ``Document``."""
        response = self._client.get_object(self.namespace, bucket_name, object_name)
        text = response.data.content.decode(self.encoding)
        logger.debug("Loaded %s (%d chars)", object_name, len(text))
        return Document(
            page_content=text,
            metadata={
                "source": f"oci://{bucket_name}@{self.namespace}/{object_name}",
                "bucket": bucket_name,
                "object_name": object_name,
            },
        )

    def stream_documents(self, bucket_name: str, object_prefix: str = "") -> Iterator[Document]:
        """Lazily yield one ``Document`` per object matching *object_prefix*.

        An exact object name is a valid prefix, so a single object can be
        loaded the same way as a whole "directory".
        """
        count = 0
        for name in self.list_object_names(bucket_name, object_prefix):
            yield self.load_object(bucket_name, name)
            count += 1
        logger.info("Streamed %d document(s) from %s/%s", count, bucket_name, object_prefix)
