"""Text splitting strategies."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from langchain_text_splitters import RecursiveCharacterTextSplitter


@runtime_checkable
class Splitter(Protocol):
    """Anything that breaks a document's text into chunks."""

    def split(self, text: str) -> list[str]: ...


class LineSplitter:
    """One chunk per non-blank line, with surrounding whitespace stripped."""

    def split(self, text: str) -> list[str]:
        return [line.strip() for line in text.splitlines() if line.strip()]


class RecursiveSplitter:
    """Size-bounded chunks with overlap.

    Parameters
    ----------
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks; must
        be smaller than *chunk_size*.
    """

    def __init__(self, chunk_size: int = 512, chunk_overlap: int = 64) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError(f"chunk_overlap must be in [0, {chunk_size}), got {chunk_overlap}")
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            separators=["\n\n", "\n", ". ", " ", ""],
        )

    def split(self, text: str) -> list[str]:
        return self._splitter.split_text(text)
