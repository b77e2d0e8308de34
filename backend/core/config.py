"""
Application configuration and constants
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Server configuration
SERVER_CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT") or 4000),
    "cors_origins": [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ],
}

# Database configuration
DATABASE_CONFIG = {
    "url": os.getenv("DATABASE_URL", "sqlite:///dawn2dusk.db"),
    "database_name": "dawn2dusk",
    "logs_table": "logs",
    "write_attempts": int(os.getenv("LOG_WRITE_ATTEMPTS", "3")),
    "write_retry_delay": float(os.getenv("LOG_WRITE_RETRY_DELAY", "0.5")),
}

# Inference backend configuration
SYSTEM_INSTRUCTION = (
    "You are a helpful assistant that finds a place in a different part of the world "
    "with similar sunrise and sunset times to a given location. Respond with something "
    'like "A location with similar times is [place name] in [country name]." '
    "Feel free to add a fun fact about the location. Try and make neighboring regions "
    "display different similar parts of the world to make responses more interesting. "
    "Focus on similar times rather than super well-known places."
)

INFERENCE_CONFIG = {
    "api_key": os.getenv("ANTHROPIC_API_KEY") or os.getenv("API_KEY"),
    "model": os.getenv("INFERENCE_MODEL", "claude-sonnet-4-6"),
    "max_tokens": int(os.getenv("INFERENCE_MAX_TOKENS", "300")),
    "timeout": float(os.getenv("INFERENCE_TIMEOUT", "60")),
    "system_instruction": SYSTEM_INSTRUCTION,
}

# API configuration
API_CONFIG = {
    "title": "dawn2dusk API",
    "version": "1.0.0",
    "description": "Find a place in another part of the world with similar sunrise and sunset times"
}
