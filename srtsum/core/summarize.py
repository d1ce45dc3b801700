from __future__ import annotations

from typing import List

from srtsum.core.config import CHUNK_OVERLAP, CHUNK_SIZE


def split_text(text: str, chunk_size: int = CHUNK_SIZE, chunk_overlap: int = CHUNK_OVERLAP) -> List[str]:
    """Split text into overlapping windows of ``chunk_size`` words.

    Consecutive windows share ``chunk_overlap`` words. The cursor always moves
    forward by at least one word, so an overlap >= chunk_size still terminates.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if chunk_overlap < 0:
        raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")

    words = (text or "").split()
    step = max(chunk_size - chunk_overlap, 1)

    chunks: List[str] = []
    start = 0
    while start < len(words):
        end = min(start + chunk_size, len(words))
        chunks.append(" ".join(words[start:end]))
        if end == len(words):
            break
        start += step

    return chunks
