"""Text-generation (LLM) client and structured-reply extraction."""

from typing import Any, Optional, Protocol
import json
import logging
import os
import time

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


class TextGenerator(Protocol):
    """Anything that turns a prompt into reply text."""

    def generate(
        self, prompt: str, *, temperature: float = 0.1, max_tokens: int = 1000
    ) -> str:
        ...


def _extract_first(text: str, opener: str, expected_type: type) -> Optional[Any]:
    """Decode the first JSON value of expected_type that starts at an opener char."""
    if not text:
        return None

    start = text.find(opener)
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, expected_type):
            return value
        start = text.find(opener, start + 1)

    return None


def extract_json_object(text: str) -> Optional[dict]:
    """Return the first JSON object embedded in free-form reply text.

    Models often wrap JSON in prose or markdown fences, so every '{' is
    tried in order until one decodes.

    Args:
        text: Raw reply text

    Returns:
        Parsed dictionary, or None if no object could be decoded
    """
    return _extract_first(text, "{", dict)


def extract_json_array(text: str) -> Optional[list]:
    """Return the first JSON array embedded in free-form reply text.

    Args:
        text: Raw reply text

    Returns:
        Parsed list, or None if no array could be decoded
    """
    return _extract_first(text, "[", list)


class LLMClient:
    """Client for generating analysis text with an LLM provider."""

    SYSTEM_PROMPT = "You are an expert SEO content analyst. Reply only with the JSON requested."

    # Substrings of errors that retrying will not fix
    NON_RETRYABLE_ERRORS = (
        'invalid api key',
        'authentication',
        'unauthorized',
        'invalid_api_key',
        'model not found',
        'invalid model',
    )

    SUPPORTED_PROVIDERS = ("openai", "anthropic")

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4",
        provider: str = "openai",
        max_retries: int = 3,
        retry_delay: float = 2.0,
        backoff_factor: float = 2.0,
    ):
        """Initialize the LLM client.

        Args:
            api_key: API key for the LLM provider
            model: Model name to use
            provider: LLM provider (openai or anthropic)
            max_retries: Retry attempts for transient failures (default: 3)
            retry_delay: Initial delay between retries in seconds (default: 2.0)
            backoff_factor: Multiplier for delay after each retry (default: 2.0)
        """
        self.api_key = api_key or os.getenv("LLM_API_KEY")
        self.model = model
        self.provider = provider
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.backoff_factor = backoff_factor
        self.call_count = 0

        if not self.api_key:
            raise ValueError(
                "API key must be provided or set in LLM_API_KEY environment variable"
            )
        if provider not in self.SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}")

    def generate(
        self, prompt: str, *, temperature: float = 0.1, max_tokens: int = 1000
    ) -> str:
        """Send a prompt to the provider, retrying transient failures.

        Implements exponential backoff for connection errors, rate limits and
        timeouts. Non-retryable errors (auth, invalid model) are raised
        immediately.

        Args:
            prompt: The prompt to send
            temperature: Sampling temperature
            max_tokens: Maximum tokens in the reply

        Returns:
            Reply text (empty string if the provider returned no content)

        Raises:
            Exception: If all retries are exhausted or a non-retryable error occurs
        """
        last_exception: Optional[Exception] = None
        current_delay = self.retry_delay

        for attempt in range(self.max_retries + 1):
            self.call_count += 1
            try:
                if self.provider == "openai":
                    return self._call_openai(prompt, temperature, max_tokens)
                return self._call_anthropic(prompt, temperature, max_tokens)

            except Exception as e:
                error_str = str(e).lower()
                last_exception = e

                if any(err in error_str for err in self.NON_RETRYABLE_ERRORS):
                    logger.error(f"Non-retryable LLM error: {e}")
                    raise

                if attempt < self.max_retries:
                    logger.warning(
                        f"LLM call failed (attempt {attempt + 1}/{self.max_retries + 1}): {e}. "
                        f"Retrying in {current_delay:.1f}s..."
                    )
                    time.sleep(current_delay)
                    current_delay *= self.backoff_factor
                else:
                    logger.error(
                        f"LLM call failed after {self.max_retries + 1} attempts: {e}"
                    )

        raise last_exception

    def _call_openai(self, prompt: str, temperature: float, max_tokens: int) -> str:
        """Call OpenAI API.

        Args:
            prompt: The prompt to send
            temperature: Sampling temperature
            max_tokens: Maximum tokens in the reply

        Returns:
            Response text
        """
        import openai

        client = openai.OpenAI(api_key=self.api_key)
        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self.SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""

    def _call_anthropic(self, prompt: str, temperature: float, max_tokens: int) -> str:
        """Call Anthropic API.

        Args:
            prompt: The prompt to send
            temperature: Sampling temperature
            max_tokens: Maximum tokens in the reply

        Returns:
            Response text
        """
        import anthropic

        client = anthropic.Anthropic(api_key=self.api_key)
        response = client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=self.SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.content[0].text if response.content else ""
