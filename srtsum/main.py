from fastapi import FastAPI
from srtsum.routes import summarize

app = FastAPI(title="srtsum (OpenAI-compatible LLM)")

app.include_router(summarize.router, prefix="", tags=["summarize"])


@app.get("/health")
def health():
    return {"ok": True, "service": "srtsum"}
