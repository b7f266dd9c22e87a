"""Unit tests for the Object Storage document loader."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from oci_rag.ingestion.loader import OCIDocumentLoader


def _listing(names: list[str], next_start_with: str | None = None) -> SimpleNamespace:
    objects = [SimpleNamespace(name=n) for n in names]
    return SimpleNamespace(data=SimpleNamespace(objects=objects, next_start_with=next_start_with))


def _object(text: str) -> SimpleNamespace:
    return SimpleNamespace(data=SimpleNamespace(content=text.encode("utf-8")))


@pytest.fixture()
def client() -> MagicMock:
    client = MagicMock()
    contents = {
        "docs/a.txt": "Alpha",
        "docs/b.txt": "Beta",
        "docs/c.txt": "Gamma — ünïcode",
    }
    client.get_object.side_effect = lambda ns, bucket, name: _object(contents[name])
    return client


def test_stream_documents_follows_pagination(client: MagicMock) -> None:
    client.list_objects.side_effect = [
        _listing(["docs/a.txt", "docs/b.txt"], next_start_with="docs/c.txt"),
        _listing(["docs/c.txt"]),
    ]
    loader = OCIDocumentLoader(client, "ns")

    docs = list(loader.stream_documents("bucket", "docs/"))

    assert [d.page_content for d in docs] == ["Alpha", "Beta", "Gamma — ünïcode"]
    second_call = client.list_objects.call_args_list[1]
    assert second_call.args == ("ns", "bucket")
    assert second_call.kwargs == {"prefix": "docs/", "start": "docs/c.txt"}


def test_stream_documents_sets_source_metadata(client: MagicMock) -> None:
    client.list_objects.return_value = _listing(["docs/a.txt"])
    doc = next(OCIDocumentLoader(client, "ns").stream_documents("bucket", "docs/a.txt"))
    assert doc.metadata == {
        "source": "oci://bucket@ns/docs/a.txt",
        "bucket": "bucket",
        "object_name": "docs/a.txt",
    }


def test_folder_markers_are_skipped(client: MagicMock) -> None:
    client.list_objects.return_value = _listing(["docs/", "docs/a.txt"])
    docs = list(OCIDocumentLoader(client, "ns").stream_documents("bucket", "docs/"))
    assert len(docs) == 1
    client.get_object.assert_called_once_with("ns", "bucket", "docs/a.txt")


def test_empty_prefix_lists_whole_bucket(client: MagicMock) -> None:
    client.list_objects.return_value = _listing([])
    assert list(OCIDocumentLoader(client, "ns").stream_documents("bucket")) == []
    client.list_objects.assert_called_once_with("ns", "bucket")


def test_stream_is_lazy(client: MagicMock) -> None:
    client.list_objects.return_value = _listing(["docs/a.txt", "docs/b.txt"])
    stream = OCIDocumentLoader(client, "ns").stream_documents("bucket", "docs/")
    client.list_objects.assert_not_called()
    next(stream)
    assert client.get_object.call_count == 1
