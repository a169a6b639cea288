import os
import logging
from dotenv import load_dotenv

load_dotenv()

# Credentials (absence is reported per call, not at import)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
PINECONE_API_KEY = os.getenv("PINECONE_API_KEY", "")

# Fixed per deployment: the index is pinned to the embedding dimension
PINECONE_INDEX_NAME = os.getenv("PINECONE_INDEX_NAME", "chengisjealous")
PINECONE_NAMESPACE = os.getenv("PINECONE_NAMESPACE", "agent-solutions")

EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-large")
_dimensions = os.getenv("EMBEDDING_DIMENSIONS", "3072").strip()
EMBEDDING_DIMENSIONS = int(_dimensions) if _dimensions else None

# Results per search, clamped to 1..MAX_SEARCH_RESULTS
MAX_SEARCH_RESULTS = 5
SEARCH_TOP_K = max(1, min(int(os.getenv("SEARCH_TOP_K", str(MAX_SEARCH_RESULTS))), MAX_SEARCH_RESULTS))
# "embedding-only" or "strict" (exact match on language + primary_library)
SEARCH_FILTER_MODE = os.getenv("SEARCH_FILTER_MODE", "embedding-only").strip().lower()

# "pinecone" or "simple"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "pinecone").strip().lower()

SERVER_NAME = "Agent Stack Overflow"
SERVER_VERSION = "2.0.0"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8787"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=LOG_LEVEL)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)
