from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


SUMMARY_SUFFIX = "_summary.txt"
PARTIALS_SUFFIX = "_partial_summaries.txt"


def summary_path_for(input_path: Path, output_path: Optional[Path] = None) -> Path:
    """Explicit output path wins, else ``<stem>_summary.txt`` beside the input."""
    if output_path is not None:
        return Path(output_path)
    return input_path.parent / f"{input_path.stem}{SUMMARY_SUFFIX}"


def partials_path_for(summary_path: Path) -> Path:
    stem = summary_path.stem
    if stem.endswith("_summary"):
        stem = stem[: -len("_summary")]
    return summary_path.parent / f"{stem}{PARTIALS_SUFFIX}"


def read_document(path: Path) -> str:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)
    return path


def save_partials(summary_path: Path, partials: Sequence[str]) -> Path:
    """Keep finished map output around when the reduce call fails."""
    return write_text(partials_path_for(summary_path), "\n\n".join(partials))
