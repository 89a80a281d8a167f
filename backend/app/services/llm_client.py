"""Text generation through the configured LLM provider."""

import logging

from app.config import Settings
from app.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class LLMClient:
    """Sends a system + user prompt pair to OpenAI or Anthropic."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._openai_client = None
        self._anthropic_client = None

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when the selected provider has no API key."""
        provider = self.settings.llm_provider
        if provider == "openai" and not self.settings.openai_api_key:
            raise ConfigurationError("OpenAI API key not configured")
        if provider == "anthropic" and not self.settings.anthropic_api_key:
            raise ConfigurationError("Anthropic API key not configured")

    def _get_openai_client(self):
        """Lazy load OpenAI client."""
        if self._openai_client is None:
            from openai import AsyncOpenAI
            self._openai_client = AsyncOpenAI(api_key=self.settings.openai_api_key)
        return self._openai_client

    def _get_anthropic_client(self):
        """Lazy load Anthropic client."""
        if self._anthropic_client is None:
            from anthropic import AsyncAnthropic
            self._anthropic_client = AsyncAnthropic(api_key=self.settings.anthropic_api_key)
        return self._anthropic_client

    async def _call_openai(
        self,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        client = self._get_openai_client()

        response = await client.chat.completions.create(
            model=self.settings.llm_model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
        )

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def _call_anthropic(
        self,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        client = self._get_anthropic_client()

        response = await client.messages.create(
            model=self.settings.llm_model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )

        if not response.content:
            return None
        return response.content[0].text

    async def complete(
        self,
        system: str,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Generate text. Any provider failure becomes an UpstreamError."""
        self.ensure_configured()
        provider = self.settings.llm_provider
        model = self.settings.llm_model

        logger.info(f"Calling {provider} {model} (temperature={temperature}, max_tokens={max_tokens})...")

        try:
            if provider == "openai":
                content = await self._call_openai(system, prompt, temperature, max_tokens)
            elif provider == "anthropic":
                content = await self._call_anthropic(system, prompt, temperature, max_tokens)
            else:
                raise ConfigurationError(f"Unknown LLM provider: {provider}")
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"{provider} API error: {e}")
            raise UpstreamError(f"{provider} API error: {e}", public="Failed to generate content") from e

        if not content:
            raise UpstreamError(f"{provider} returned no content", public="Content generation failed")
        return content
