"""Configuration and runtime constants."""

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# API Keys
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
COHERE_API_KEY = os.getenv("COHERE_API_KEY")
HUGGING_FACE_API_KEY = os.getenv("HUGGING_FACE_API_KEY")
LEONARDO_API_KEY = os.getenv("LEONARDO_API_KEY")
PEXELS_API_KEY = os.getenv("PEXELS_API_KEY")

# Model Configuration
MODEL_NAME = os.getenv("MODEL_NAME", "gpt-4o-mini")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
COHERE_MODEL = os.getenv("COHERE_MODEL", "command-light")
HUGGING_FACE_MODEL = os.getenv("HUGGING_FACE_MODEL", "mistralai/Mistral-7B-Instruct-v0.2")
TEMPERATURE = float(os.getenv("TEMPERATURE", "0.7"))

# Provider table: name -> enabled flag, priority rank (lower = tried first), credential.
# Read once at process start.
PROVIDER_SETTINGS = {
    "openai": {
        "enabled": _flag("OPENAI_ENABLED", "0"),  # paid, opt-in
        "priority": int(os.getenv("OPENAI_PRIORITY", "10")),
        "credential": OPENAI_API_KEY,
    },
    "gemini": {
        "enabled": _flag("GEMINI_ENABLED"),
        "priority": int(os.getenv("GEMINI_PRIORITY", "20")),
        "credential": GEMINI_API_KEY,
    },
    "cohere": {
        "enabled": _flag("COHERE_ENABLED"),
        "priority": int(os.getenv("COHERE_PRIORITY", "30")),
        "credential": COHERE_API_KEY,
    },
    "huggingface": {
        "enabled": _flag("HUGGING_FACE_ENABLED"),
        "priority": int(os.getenv("HUGGING_FACE_PRIORITY", "40")),
        "credential": HUGGING_FACE_API_KEY,
    },
}

# Generation Configuration
DEFAULT_WORD_COUNT = int(os.getenv("DEFAULT_WORD_COUNT", "15"))
PROVIDER_TIMEOUT_SECONDS = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30"))
PROVIDER_MAX_RETRIES = int(os.getenv("PROVIDER_MAX_RETRIES", "2"))
GENERATION_COOLDOWN_SECONDS = float(os.getenv("GENERATION_COOLDOWN_SECONDS", "2.0"))
LEDGER_RESET_THRESHOLD = int(os.getenv("LEDGER_RESET_THRESHOLD", "10"))
MAX_GENERATION_ATTEMPTS = int(os.getenv("MAX_GENERATION_ATTEMPTS", "3"))  # 1 + 2 rotations

# Image Configuration
LEONARDO_ENABLED = _flag("LEONARDO_ENABLED")
LEONARDO_MODEL = os.getenv("LEONARDO_MODEL", "flux")  # see LeonardoImageProvider.MODELS
IMAGE_STYLE = os.getenv("IMAGE_STYLE", "cartoon")  # cartoon | realistic | artistic | simple
IMAGE_SIZE = os.getenv("IMAGE_SIZE", "512x512")
IMAGE_POLL_INTERVAL = float(os.getenv("IMAGE_POLL_INTERVAL", "3.0"))
IMAGE_MAX_POLL_ATTEMPTS = int(os.getenv("IMAGE_MAX_POLL_ATTEMPTS", "30"))
IMAGE_REQUEST_TIMEOUT = float(os.getenv("IMAGE_REQUEST_TIMEOUT", "15"))
MAX_PARALLEL_IMAGE_JOBS = int(os.getenv("MAX_PARALLEL_IMAGE_JOBS", "5"))

# Testing Configuration
LIVE_TESTING = os.getenv("VOCAB_FORGE_LIVE", "0") == "1"
