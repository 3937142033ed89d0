"""
config.py

Central place to load environment variables.
"""

from dotenv import load_dotenv
import os

# Load variables from .env file into environment
load_dotenv()

# Remote document processing (OCR + extraction) endpoint
PROCESS_API_URL = os.getenv("PROCESS_API_URL", "http://localhost:81/process/")
PROCESS_API_TIMEOUT = float(os.getenv("PROCESS_API_TIMEOUT", "60"))
PROCESS_API_MAX_RETRIES = int(os.getenv("PROCESS_API_MAX_RETRIES", "2"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Server settings used by run.py
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8000"))
APP_RELOAD = os.getenv("APP_RELOAD", "false").lower() == "true"
