import os
from dotenv import load_dotenv

load_dotenv()
# Also load .env.example as a fallback for local testing if .env is not present
load_dotenv('.env.example', override=False)

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Gemini configuration (API_KEY is accepted for older deployments)
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY') or ''
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-3-flash-preview')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Uploaded photos are inlined into the request, keep them reasonably small
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', str(10 * 1024 * 1024)))
