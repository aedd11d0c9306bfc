"""Configuration management for LexiDaily."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")  # "json" or "text"

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:8000,http://127.0.0.1:8000"
).split(",")

# Model Configuration
GENERATION_MODEL = os.getenv("GENERATION_MODEL", "llama-3.3-70b-versatile")
GENERATION_MAX_TOKENS = int(os.getenv("GENERATION_MAX_TOKENS", "2048"))
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
GENERATION_LOG_PATH = os.getenv("GENERATION_LOG_PATH", "logs/generations.jsonl")

# Vocabulary Configuration
TARGET_LANGUAGE = os.getenv("TARGET_LANGUAGE", "Hindi")
DAILY_WORD_COUNT = int(os.getenv("DAILY_WORD_COUNT", "5"))
WORD_BANK_FILE = os.getenv("WORD_BANK_FILE")  # newline-delimited, optional

# Page / Export Configuration
PAGE_TITLE = os.getenv("PAGE_TITLE", "LexiDaily")
EXPORT_FILENAME = "lexidaily_words.pdf"
MEANING_FONT_PATH = os.getenv(
    "MEANING_FONT_PATH",
    "fonts/NotoSansDevanagari-Regular.ttf"
)

# PDF Layout (millimetres / points)
PDF_MARGIN_MM = 20
PDF_LINE_HEIGHT_MM = 7
PDF_TITLE_FONT_SIZE = 18
PDF_BODY_FONT_SIZE = 12
PDF_NOTE_FONT_SIZE = 10
