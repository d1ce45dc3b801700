"""Watch a folder for new .srt files, summarize them and archive the results."""
from __future__ import annotations

import argparse
import logging
import shutil
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from srtsum.cli import setup_logging
from srtsum.core.config import ARCHIVE_DIR, WATCH_DIR, WATCH_INTERVAL
from srtsum.core.llm_client import ServiceError
from srtsum.core.pipeline import CombineError, summarize_file
from srtsum.core.storage import summary_path_for
from srtsum.core.text_clean import is_subtitle

logger = logging.getLogger(__name__)


def find_srt_files(watch_dir: Path) -> List[Path]:
    if not watch_dir.is_dir():
        return []
    return sorted(p for p in watch_dir.iterdir() if p.is_file() and is_subtitle(p.suffix))


def process_one(srt_path: Path, archive_dir: Path, summarize: Callable = summarize_file) -> bool:
    """Summarize one subtitle file and move it plus its summary to the archive.

    On failure the .srt stays where it is and False is returned.
    """
    print(f"Processing: {srt_path.name}")
    try:
        summarize(srt_path)
    except (ServiceError, CombineError, OSError, ValueError) as e:
        logger.error("Failed to process %s: %s", srt_path.name, e)
        return False

    archive_dir.mkdir(parents=True, exist_ok=True)
    shutil.move(str(srt_path), str(archive_dir / srt_path.name))

    summary = summary_path_for(srt_path)
    if summary.exists():
        shutil.move(str(summary), str(archive_dir / summary.name))
        print(f"Success: {summary.name} moved")
    else:
        logger.warning("%s not found for %s", summary.name, srt_path.name)
    return True


def run_monitor(
    watch_dir: Path,
    archive_dir: Optional[Path] = None,
    *,
    interval: float = WATCH_INTERVAL,
    once: bool = False,
    summarize: Callable = summarize_file,
) -> int:
    """Poll ``watch_dir`` until interrupted (or a single pass with ``once``).

    Returns the number of files archived.
    """
    archive_dir = archive_dir or watch_dir / "srt"
    processed = 0
    waiting = False

    while True:
        files = find_srt_files(watch_dir)
        for srt_path in files:
            waiting = False
            if process_one(srt_path, archive_dir, summarize):
                processed += 1

        if not files and not waiting:
            print(f"Waiting for new .srt files in {watch_dir} ...")
            waiting = True

        if once:
            return processed
        time.sleep(interval)


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="srtsum-monitor", description="Summarize .srt files as they appear in a folder.")
    ap.add_argument("--watch-dir", default=WATCH_DIR, help="Folder to poll")
    ap.add_argument("--archive-dir", default=ARCHIVE_DIR or None, help="Where processed files go (default: <watch-dir>/srt)")
    ap.add_argument("--interval", type=float, default=WATCH_INTERVAL, help="Seconds between polls")
    ap.add_argument("--once", action="store_true", help="Process what is there now and exit")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    setup_logging(args.verbose)
    archive = Path(args.archive_dir) if args.archive_dir else None
    try:
        run_monitor(Path(args.watch_dir), archive, interval=args.interval, once=args.once)
    except KeyboardInterrupt:
        print("Monitor stopped by user.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
