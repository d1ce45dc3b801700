from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from srtsum.core.config import CHUNK_OVERLAP, CHUNK_SIZE, MAP_WORKERS
from srtsum.core.llm_client import Generator, make_generator
from srtsum.core.storage import read_document, save_partials, summary_path_for, write_text
from srtsum.core.summarize import split_text
from srtsum.core.summarizer import combine_summaries, map_summaries
from srtsum.core.text_clean import normalize_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryResult:
    summary: str
    partial_summaries: Tuple[str, ...]
    num_chunks: int
    map_seconds: float
    total_seconds: float


class CombineError(RuntimeError):
    """The reduce call failed after every chunk was summarized."""

    def __init__(self, message: str, partial_summaries: List[str]):
        super().__init__(message)
        self.partial_summaries = partial_summaries


def summarize_document(
    text: str,
    *,
    generate: Optional[Generator] = None,
    chunk_size: int = CHUNK_SIZE,
    chunk_overlap: int = CHUNK_OVERLAP,
    max_workers: int = MAP_WORKERS,
) -> SummaryResult:
    """Chunk, map and reduce an already normalized document."""
    generate = generate or make_generator()
    t0 = time.perf_counter()

    chunks = split_text(text, chunk_size, chunk_overlap)
    print(f"Split into {len(chunks)} chunks")
    if not chunks:
        return SummaryResult("", (), 0, 0.0, time.perf_counter() - t0)

    t_map = time.perf_counter()
    partials = map_summaries(chunks, generate, max_workers=max_workers)
    map_seconds = time.perf_counter() - t_map
    print(f"Map step completed in {map_seconds:.2f}s")

    try:
        final = combine_summaries(partials, generate)
    except Exception as e:
        raise CombineError(f"Combine step failed: {e}", partials) from e

    total = time.perf_counter() - t0
    return SummaryResult(final, tuple(partials), len(chunks), map_seconds, total)


def summarize_file(
    input_path: Path,
    output_path: Optional[Path] = None,
    *,
    generate: Optional[Generator] = None,
    chunk_size: int = CHUNK_SIZE,
    chunk_overlap: int = CHUNK_OVERLAP,
    max_workers: int = MAP_WORKERS,
) -> Tuple[SummaryResult, Path]:
    """Summarize one file and write the result. Returns (result, written path).

    A missing input raises FileNotFoundError before any generation request.
    If the combine step fails, the partial summaries are saved next to the
    would-be output before the error propagates.
    """
    input_path = Path(input_path)
    text = read_document(input_path)
    print(f"Processing file: {input_path}")
    t0 = time.perf_counter()

    document = normalize_document(text, input_path.suffix)
    out = summary_path_for(input_path, output_path)

    try:
        result = summarize_document(
            document,
            generate=generate,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            max_workers=max_workers,
        )
    except CombineError as e:
        saved = save_partials(out, e.partial_summaries)
        logger.error("Partial summaries saved to %s", saved)
        raise

    write_text(out, result.summary)
    print(f"Summary saved to {out}")
    print(f"Total processing time: {time.perf_counter() - t0:.2f}s")
    return result, out
