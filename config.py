import os
import logging
from dotenv import load_dotenv

load_dotenv()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_API_URL = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
MODEL_NAME = os.getenv("MODEL_NAME", "gpt-4")
# No timeout unless explicitly configured
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT")) if os.getenv("OPENAI_TIMEOUT") else None

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/screenings.db")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

DEBUG_LIST_LIMIT = int(os.getenv("DEBUG_LIST_LIMIT", "50"))
SEED_SAMPLE_SCREENINGS = os.getenv("SEED_SAMPLE_SCREENINGS", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
