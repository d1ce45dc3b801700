from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from srtsum.core.config import BASE_URL, CHUNK_OVERLAP, CHUNK_SIZE, MAP_WORKERS, MODEL
from srtsum.core.llm_client import ServiceError, make_generator
from srtsum.core.pipeline import CombineError, summarize_file


def setup_logging(verbose: bool = False) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="srtsum",
        description="Summarize a .srt or text file into bullet points with an OpenAI-compatible LLM.",
    )
    ap.add_argument("input_file", nargs="?", help="Input .srt or text file")
    ap.add_argument("output_file", nargs="?", help="Output path (default: <input>_summary.txt beside the input)")
    ap.add_argument("--chunk-size", type=int, default=CHUNK_SIZE, help="Words per chunk")
    ap.add_argument("--chunk-overlap", type=int, default=CHUNK_OVERLAP, help="Words shared by consecutive chunks")
    ap.add_argument("--model", default=MODEL, help="Model name sent to the service")
    ap.add_argument("--base-url", default=BASE_URL, help="OpenAI-compatible API base URL")
    ap.add_argument("--workers", type=int, default=MAP_WORKERS, help="Concurrent map requests")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if not args.input_file:
        ap.print_usage(sys.stderr)
        return 1

    setup_logging(args.verbose)

    input_path = Path(args.input_file)
    output_path = Path(args.output_file) if args.output_file else None
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    generate = make_generator(model=args.model, base_url=args.base_url)
    try:
        summarize_file(
            input_path,
            output_path,
            generate=generate,
            chunk_size=args.chunk_size,
            chunk_overlap=args.chunk_overlap,
            max_workers=args.workers,
        )
    except (ServiceError, CombineError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
