"""Map-reduce bullet summarization on top of a prompt -> text generator."""
from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Dict, List, Sequence

from srtsum.core.llm_client import Generator
from srtsum.core.prompts import COMBINE_PROMPT, MAP_PROMPT


def summarize_chunk(chunk: str, generate: Generator) -> str:
    """Summarize a single chunk into '-' bullets."""
    return generate(MAP_PROMPT.format(text=chunk))


def map_summaries(chunks: Sequence[str], generate: Generator, *, max_workers: int = 1) -> List[str]:
    """
    Map phase: one partial summary per chunk, in chunk order.

    Args:
        chunks: Chunk texts in document order
        generate: Prompt -> text callable
        max_workers: Concurrent requests; 1 keeps the calls strictly sequential

    Returns:
        Partial summaries, index-aligned with ``chunks``

    The first failing chunk aborts the whole phase with its exception.
    """
    total = len(chunks)
    if max_workers <= 1 or total <= 1:
        parts = []
        for i, chunk in enumerate(chunks):
            print(f"Summarizing chunk {i + 1}/{total}...")
            parts.append(summarize_chunk(chunk, generate))
        return parts

    results: Dict[int, str] = {}
    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        future_to_idx = {executor.submit(summarize_chunk, chunk, generate): i for i, chunk in enumerate(chunks)}
        done, _ = wait(future_to_idx, return_when=FIRST_EXCEPTION)
        for future in done:
            idx = future_to_idx[future]
            # .result() re-raises the chunk's error
            results[idx] = future.result()
            print(f"Summarized chunk {idx + 1}/{total}")
    except BaseException:
        # don't sit out in-flight requests (and their retries) once a chunk failed
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown()

    return [results[i] for i in range(total)]


def combine_summaries(partials: Sequence[str], generate: Generator) -> str:
    """Reduce phase: merge partial summaries into one deduplicated bullet list.

    Runs for a single partial too, so the final output always goes through
    the combine prompt.
    """
    combined = "\n\n".join(partials)
    return generate(COMBINE_PROMPT.format(text=combined))
