"""Gemini client for image description."""

import time
from io import BytesIO

from google import genai
from google.genai import types
from PIL import Image


class GeminiClient:
    """Client for describing images via Gemini."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash"):
        self.client = genai.Client(api_key=api_key)
        self.model = model

    def _call_with_retry(self, func, max_retries=5, retry_codes=(503, 429)):
        """Retry API calls on transient errors with exponential backoff."""
        for attempt in range(max_retries):
            try:
                return func()
            except Exception as e:
                error_str = str(e)
                is_retryable = any(str(code) in error_str for code in retry_codes)

                if not is_retryable or attempt == max_retries - 1:
                    raise

                wait_time = 2 ** attempt  # 1s, 2s, 4s
                print(f"Gemini API error (attempt {attempt + 1}/{max_retries}), retrying in {wait_time}s: {e}", flush=True)
                time.sleep(wait_time)

    def describe_image(self, image: bytes, prompt: str) -> str:
        """
        Ask Gemini to describe an image.

        Args:
            image: Image bytes
            prompt: Instructions for the description

        Returns:
            Response text (expected to be JSON, parsed by the caller)
        """
        img = Image.open(BytesIO(image))

        response = self._call_with_retry(
            lambda: self.client.models.generate_content(
                model=self.model,
                contents=[prompt, img],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    temperature=0.4,
                ),
            )
        )

        if not response.text:
            raise RuntimeError("No description generated by Gemini")
        return response.text
