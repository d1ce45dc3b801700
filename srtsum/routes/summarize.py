from typing import Optional

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from srtsum.core.llm_client import ServiceError, make_generator
from srtsum.core.pipeline import CombineError, summarize_document
from srtsum.core.text_clean import normalize_document

router = APIRouter()


class SummarizeRequest(BaseModel):
    text: str
    filename: Optional[str] = None


@router.post("/summarize")
def summarize(req: SummarizeRequest):
    suffix = ""
    if req.filename and "." in req.filename:
        suffix = "." + req.filename.rsplit(".", 1)[-1]

    document = normalize_document(req.text, suffix)
    if not document.strip():
        raise HTTPException(status_code=400, detail="No text to summarize.")

    try:
        result = summarize_document(document, generate=make_generator())
    except (ServiceError, CombineError) as e:
        raise HTTPException(status_code=502, detail=f"Generation service failed: {e}")

    return {
        "summary": result.summary,
        "chunks": result.num_chunks,
        "map_seconds": round(result.map_seconds, 4),
        "total_seconds": round(result.total_seconds, 4),
    }
