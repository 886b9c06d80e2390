# docqa/config.py

import os
from dotenv import load_dotenv

# Load environment variables from a .env file
load_dotenv()

# --- Generation (Gemini) ---
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
GENERATION_TEMPERATURE = 0.3
GENERATION_MAX_OUTPUT_TOKENS = 1000
REQUEST_TIMEOUT_SECONDS = float(os.getenv("DOCQA_REQUEST_TIMEOUT", "60"))

# --- Documents ---
DATA_DIRECTORY = os.getenv("DOCQA_DATA_DIR", "data")
SUPPORTED_EXTENSIONS = {".pdf", ".txt", ".md"}

# --- Chunking ---
CHUNK_SIZE = 500
CHUNK_OVERLAP = 50

# --- Vector space ---
MAX_VOCABULARY_SIZE = 1000
MIN_EMBEDDING_DIMENSION = 100
MIN_TOKEN_LENGTH = 3

# --- Querying ---
DEFAULT_MAX_RESULTS = 5
EXCERPT_LENGTH = 200

# --- API ---
API_HOST = os.getenv("DOCQA_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("DOCQA_API_PORT", "8000"))
MIN_BEARER_TOKEN_LENGTH = 11
