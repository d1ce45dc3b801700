import os
from dotenv import load_dotenv

load_dotenv()

# OpenAI-compatible endpoint. Ollama exposes one under /v1.
BASE_URL = os.getenv("SRTSUM_BASE_URL", "http://localhost:11434/v1")
MODEL = os.getenv("SRTSUM_MODEL", "llama3.2")
API_KEY = os.getenv("SRTSUM_API_KEY", "")

TEMPERATURE = float(os.getenv("SRTSUM_TEMPERATURE", "0.2"))
TIMEOUT = float(os.getenv("SRTSUM_TIMEOUT", "300"))
MAX_RETRIES = int(os.getenv("SRTSUM_MAX_RETRIES", "3"))
BACKOFF = float(os.getenv("SRTSUM_BACKOFF", "1.0"))

# Sizes are in words, not model tokens.
CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "2000"))
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "200"))
MAP_WORKERS = int(os.getenv("SRTSUM_MAP_WORKERS", "1"))

WATCH_DIR = os.getenv("WATCH_DIR", os.path.join(os.path.expanduser("~"), "Downloads"))
ARCHIVE_DIR = os.getenv("ARCHIVE_DIR", "")
WATCH_INTERVAL = float(os.getenv("WATCH_INTERVAL", "5"))
