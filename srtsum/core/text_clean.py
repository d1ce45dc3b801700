from __future__ import annotations

import re


_LINE_RE = re.compile(r"\r?\n")
_SEQ_RE = re.compile(r"^\d+$")
_TIMESTAMP_RE = re.compile(r"\d{2}:\d{2}:\d{2},\d{3} --> \d{2}:\d{2}:\d{2},\d{3}")

SUBTITLE_SUFFIX = ".srt"


def clean_srt(text: str) -> str:
    """Drop SRT cue numbers and timestamp lines, collapse the rest to one paragraph.

    Lines that match neither rule are kept as spoken content, so a malformed
    file still produces text instead of an error.
    """
    kept = []
    for line in _LINE_RE.split(text or ""):
        t = line.strip()
        if not t or _SEQ_RE.match(t) or _TIMESTAMP_RE.search(t):
            continue
        kept.append(t)
    return " ".join(kept)


def is_subtitle(suffix: str) -> bool:
    return suffix.lower() == SUBTITLE_SUFFIX


def normalize_document(text: str, suffix: str) -> str:
    """Subtitle files get cleaned, everything else is returned as-is."""
    if is_subtitle(suffix):
        return clean_srt(text)
    return text
