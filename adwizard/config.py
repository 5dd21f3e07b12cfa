import os
from dotenv import load_dotenv

load_dotenv()

# API Keys and Config - loaded from .env
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Network timeout for a single AI call (seconds)
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "60"))

# Directory that template image_url paths ("/templates/x.png") resolve against
TEMPLATE_ASSETS_DIR = os.getenv("TEMPLATE_ASSETS_DIR", "public")

# Where the CLI writes exported creatives
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output")
