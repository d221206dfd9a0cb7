from anthropic import AsyncAnthropic, APIStatusError, APIError, APIConnectionError, APITimeoutError
from typing import Optional, Dict, List, Any
import asyncio
import json
import random
import httpx

from ministry_hub.core.config import settings
from ministry_hub.core.exceptions import AIUnavailableError, AIServiceError, AIResponseParseError
from ministry_hub.core.logging_config import logger

RETRYABLE_ERRORS = ['overloaded_error', 'rate_limit_error', 'server_error']


class AIClient:
    """Claude API wrapper used for journal reflections and lead scoring"""

    def __init__(self):
        client_kwargs: Dict[str, Any] = {"api_key": settings.ANTHROPIC_API_KEY}

        if settings.ANTHROPIC_BASE_URL and settings.ANTHROPIC_BASE_URL.strip():
            client_kwargs["base_url"] = settings.ANTHROPIC_BASE_URL.strip()
            logger.info(f"Using custom Claude API base URL: {settings.ANTHROPIC_BASE_URL}")

        request_timeout = float(settings.AI_REQUEST_TIMEOUT)
        client_kwargs["timeout"] = httpx.Timeout(
            connect=float(settings.AI_CONNECT_TIMEOUT),
            read=request_timeout,
            write=request_timeout,
            pool=request_timeout
        )

        self.async_client = AsyncAnthropic(**client_kwargs)
        self.model = settings.AI_MODEL
        self.max_retries = settings.AI_MAX_RETRIES

        logger.info(f"AI client initialized: timeout={request_timeout}s, model={self.model}")

    def _is_retryable_error(self, error: Exception) -> bool:
        """Check if an error is retryable (overload, rate limit, network issues)"""
        if isinstance(error, (APIConnectionError, APITimeoutError)):
            return True

        if isinstance(error, (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError)):
            return True

        if isinstance(error, (APIStatusError, APIError)):
            if hasattr(error, 'body') and isinstance(error.body, dict):
                error_type = error.body.get('error', {}).get('type', '')
                return error_type in RETRYABLE_ERRORS
            if hasattr(error, 'status_code'):
                return error.status_code in [429, 500, 502, 503, 529]

        return False

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Exponential backoff with up to 25% jitter"""
        delay = min(settings.AI_RETRY_BASE_DELAY * (2 ** attempt), settings.AI_RETRY_MAX_DELAY)
        return delay + delay * random.uniform(0, 0.25)

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = None,
        temperature: float = None,
    ) -> str:
        """
        Generate a single completion.

        Returns the response text. Raises AIServiceError once retries are
        exhausted or the error is not retryable.
        """
        messages: List[Dict[str, str]] = [{"role": "user", "content": prompt}]
        max_tokens = max_tokens or settings.AI_MAX_TOKENS
        temperature = settings.AI_TEMPERATURE if temperature is None else temperature

        logger.info(f"AI request: model={self.model}, max_tokens={max_tokens}, prompt_len={len(prompt)}")

        for attempt in range(self.max_retries + 1):
            try:
                response = await self.async_client.messages.create(
                    model=self.model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    system=system_prompt or "",
                    messages=messages
                )
                content = response.content[0].text if response.content else ""
                logger.info(
                    f"AI response: id={response.id}, "
                    f"tokens={response.usage.input_tokens + response.usage.output_tokens}"
                )
                return content

            except Exception as e:
                error_type = type(e).__name__
                if self._is_retryable_error(e) and attempt < self.max_retries:
                    delay = self._calculate_retry_delay(attempt)
                    logger.warning(
                        f"AI error [{error_type}] (attempt {attempt + 1}/{self.max_retries + 1}), retrying in {delay:.1f}s...",
                        extra={
                            "event_type": "ai_retry",
                            "error_type": error_type,
                            "attempt": attempt + 1,
                            "retry_delay": delay
                        }
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(
                        f"AI error (non-retryable or max retries exceeded): {error_type}: {e}",
                        extra={"event_type": "ai_error", "error_type": error_type, "attempt": attempt + 1}
                    )
                    raise AIServiceError(f"AI request failed: {error_type}") from e

        raise AIServiceError("AI request failed")

    async def generate_json(self, prompt: str, system_prompt: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        """Generate and parse a JSON object from the response text"""
        text = await self.generate(prompt, system_prompt=system_prompt, **kwargs)
        return parse_json_object(text)


def parse_json_object(text: str) -> Dict[str, Any]:
    """Extract the first {...} block from model output"""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise AIResponseParseError("No JSON object in AI response")
    try:
        parsed = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise AIResponseParseError(f"Invalid JSON in AI response: {e}") from e
    if not isinstance(parsed, dict):
        raise AIResponseParseError("AI response JSON is not an object")
    return parsed


_ai_client: Optional[AIClient] = None


def get_ai_client() -> AIClient:
    """FastAPI dependency / accessor. Raises AIUnavailableError without an API key."""
    global _ai_client
    if not settings.ai_enabled:
        raise AIUnavailableError()
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client
