"""Async LLM client (OpenAI Responses API)."""

import asyncio

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError,
)


class LLMClient:
    """Thin async wrapper over OpenAI. Constructed with an explicit api_key."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4.1",
        timeout: float = 60.0,
        max_retries: int = 3,
    ):
        # SDK retries are disabled; _call_with_retry owns backoff
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.model = model
        self.max_retries = max_retries
        self.total_input_tokens = 0
        self.total_output_tokens = 0

    async def _call_with_retry(self, func):
        """Retry on 429 / 5xx / timeouts with exponential backoff."""
        for attempt in range(self.max_retries):
            try:
                return await func()
            except (RateLimitError, APITimeoutError, APIConnectionError) as e:
                error = e
            except APIStatusError as e:
                if e.status_code < 500:
                    raise
                error = e

            if attempt == self.max_retries - 1:
                raise error

            wait_time = 2 ** attempt  # 1s, 2s, 4s
            print(f"OpenAI error (attempt {attempt + 1}/{self.max_retries}), retrying in {wait_time}s: {error}", flush=True)
            await asyncio.sleep(wait_time)

    async def call(
        self,
        prompt: str,
        user_message: str,
        image_url: str | None = None,
        label: str = "",
        max_output_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> str:
        """Make LLM call and return response text.

        Args:
            prompt: Developer prompt (instructions).
            user_message: User message text.
            image_url: Optional image (URL or data URI) sent alongside the text.
            label: Optional label for logging token usage.

        Returns:
            Response text content.
        """
        content = [{"type": "input_text", "text": user_message}]
        if image_url:
            content.append({"type": "input_image", "image_url": image_url})

        response = await self._call_with_retry(
            lambda: self._client.responses.create(
                model=self.model,
                input=[
                    {"role": "developer", "content": prompt},
                    {"role": "user", "content": content},
                ],
                max_output_tokens=max_output_tokens,
                temperature=temperature,
            )
        )

        # Track tokens
        usage = response.usage
        if usage is not None:
            self.total_input_tokens += usage.input_tokens
            self.total_output_tokens += usage.output_tokens
            if label:
                print(f"  {label}: input={usage.input_tokens}, output={usage.output_tokens}", flush=True)

        text = (response.output_text or "").strip()
        if not text:
            raise RuntimeError("No response from OpenAI")
        return text

    async def check_api_key(self) -> bool:
        """True if the key can list models."""
        try:
            await self._client.models.list()
            return True
        except (APIStatusError, APIConnectionError, APITimeoutError) as e:
            print(f"API key check failed: {e}", flush=True)
            return False

    def get_token_totals(self) -> tuple[int, int]:
        """Return accumulated (input, output) tokens."""
        return self.total_input_tokens, self.total_output_tokens
