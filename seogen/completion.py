"""Text completion client for OpenAI and Anthropic"""

import logging
from typing import Optional

from anthropic import Anthropic
from openai import OpenAI

from .config import Settings
from .errors import ProviderError
from .utils.retry import llm_retry

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MOCK_RESPONSE_FORMAT = 'Mocked response for prompt: "{prompt}"'


def mock_completion(prompt: str) -> str:
    return MOCK_RESPONSE_FORMAT.format(prompt=prompt)


class CompletionClient:
    """Unified completion client supporting OpenAI and Anthropic.

    Falls back to mock mode, with no SDK client and no network access, when
    the provider credential is missing or set to "mock".
    """

    def __init__(self, provider: str = "openai", api_key: Optional[str] = None, mock: bool = False):
        self.provider = provider.lower()
        self.mock = mock or not api_key or api_key.strip().lower() == "mock"
        self.client = None

        if self.provider not in ("openai", "anthropic"):
            raise ValueError(f"Unsupported LLM provider: {provider}")

        if self.mock:
            logger.warning("No provider credential configured, mocking %s completions", self.provider)
        elif self.provider == "openai":
            self.client = OpenAI(api_key=api_key, max_retries=0)
        else:
            self.client = Anthropic(api_key=api_key, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(provider=settings.llm_provider, api_key=settings.api_key, mock=settings.mock_mode)

    def complete(self, prompt: str, model: str, max_tokens: int) -> str:
        """Run a single completion

        Args:
            prompt: Prompt text, sent as the only user message
            model: Provider model id
            max_tokens: Output token budget

        Returns:
            Generated text, stripped

        Raises:
            ProviderError: The call failed or produced no text
        """
        if self.mock:
            logger.info("Mocking completion (model=%s, max_tokens=%s)", model, max_tokens)
            return mock_completion(prompt)

        try:
            text = self._request(prompt, model, max_tokens)
        except Exception as e:
            logger.error(f"Completion request failed ({self.provider}/{model}): {e}")
            raise ProviderError(f"Completion request failed: {e}") from e

        text = (text or "").strip()
        if not text:
            logger.error(f"No content generated by {self.provider}/{model}")
            raise ProviderError("No content generated")

        logger.debug("Completion (%s chars): %s", len(text), text[:200])
        return text

    @llm_retry()
    def _request(self, prompt: str, model: str, max_tokens: int) -> Optional[str]:
        if self.provider == "openai":
            response = self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=TEMPERATURE,
            )
            if not response.choices:
                return None
            return response.choices[0].message.content

        response = self.client.messages.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=TEMPERATURE,
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
