"""
Base LLM Client

Async client for the Ollama text-generation service, used as the
summarization oracle.

Features:
- Model catalog query (GET /api/tags)
- Single-shot, non-streaming generation (POST /api/generate)
- One aiohttp session per client instance, bounded by a request timeout
- Request/response logging with latency
- Transport failures mapped onto the oracle error taxonomy

The client never retries; a failed call surfaces to the caller.

Usage:
    config = LLMConfig(host="http://localhost:11434", timeout=600)

    async with OllamaClient(config) as client:
        models = await client.list_models()
        text = await client.generate("qwen3:14b", prompt)
"""

import time
import json
import asyncio
import aiohttp
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Protocol

from ..config import OLLAMA_URL, OLLAMA_TEMPERATURE, DEFAULT_REQUEST_TIMEOUT
from ..errors import ConnectivityError, ProtocolError, EmptyResponseError
from ..logs.logging_config import (
    get_llm_logger,
    log_llm_request,
    log_llm_response,
    log_context_usage,
)

logger = get_llm_logger()

# Error bodies are truncated before being put into exception messages
TAGS_ERROR_BODY_LIMIT = 4 << 10
GENERATE_ERROR_BODY_LIMIT = 8 << 10


class OracleClient(Protocol):
    """Interface the summarization pipeline needs from the oracle."""

    async def list_models(self) -> List[str]: ...

    async def generate(self, model: str, prompt: str, task: Optional[str] = None) -> str: ...


@dataclass
class LLMConfig:
    """
    Configuration for an OllamaClient instance.

    Example:
        config = LLMConfig(
            host="http://gpu-box:11434",
            timeout=600,
            task_name="summarize"
        )
    """
    host: str = OLLAMA_URL

    # Total request timeout in seconds
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    pool_limit: int = 10

    # Sent as options.temperature when set
    temperature: Optional[float] = OLLAMA_TEMPERATURE

    # Logging identifier
    task_name: str = "summarize"

    def base_url(self) -> str:
        return self.host.rstrip("/")


class OllamaClient:
    """
    Ollama oracle client.

    Each instance maintains its own aiohttp session, created lazily and
    closed by close() or on leaving an ``async with`` block.
    """

    def __init__(self, config: Optional[LLMConfig] = None):
        self.config = config or LLMConfig()
        self._session: Optional[aiohttp.ClientSession] = None

        logger.debug(
            f"[OLLAMA] Initialized | url={self.config.base_url()} | "
            f"timeout={self.config.timeout}s"
        )

    async def __aenter__(self) -> "OllamaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session for this instance."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            connector = aiohttp.TCPConnector(
                limit=self.config.pool_limit,
                limit_per_host=self.config.pool_limit
            )
            self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
            logger.debug("[OLLAMA] Session created")
        return self._session

    async def close(self):
        """Close this instance's session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug("[OLLAMA] Session closed")

    async def list_models(self) -> List[str]:
        """
        Query the model catalog.

        Returns:
            Model identifiers in the order the server reports them

        Raises:
            ConnectivityError: Server unreachable or timed out
            ProtocolError: Error status or malformed payload
        """
        payload = await self._request_json(
            "GET", "/api/tags", label="tags", error_body_limit=TAGS_ERROR_BODY_LIMIT
        )

        models = payload.get("models") if isinstance(payload, dict) else None
        if models is None:
            models = []
        if not isinstance(models, list):
            raise ProtocolError("ollama tags response has no model list")

        names = []
        for entry in models:
            name = entry.get("name") if isinstance(entry, dict) else None
            if isinstance(name, str) and name:
                names.append(name)

        logger.debug(f"[OLLAMA] Catalog | models={names}")
        return names

    async def generate(self, model: str, prompt: str, task: Optional[str] = None) -> str:
        """
        Generate text for a prompt with full logging.

        Args:
            model: Model identifier
            prompt: Self-contained prompt text
            task: Task name for logging (uses config.task_name if not specified)

        Returns:
            The raw generated text

        Raises:
            ConnectivityError: Server unreachable or timed out
            ProtocolError: Error status or malformed payload
            EmptyResponseError: Server returned blank text
        """
        task_name = task or self.config.task_name

        body: Dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "stream": False,
        }
        if self.config.temperature is not None:
            body["options"] = {"temperature": self.config.temperature}

        log_llm_request(model=model, task=task_name, prompt=prompt)
        log_context_usage(model=model, prompt=prompt)

        start_time = time.time()

        try:
            payload = await self._request_json(
                "POST", "/api/generate",
                label="generate",
                json_body=body,
                error_body_limit=GENERATE_ERROR_BODY_LIMIT
            )
            response = payload.get("response") if isinstance(payload, dict) else None
            if not isinstance(response, str) or not response.strip():
                raise EmptyResponseError("ollama returned empty response")

        except Exception as e:
            latency_ms = (time.time() - start_time) * 1000
            log_llm_response(
                model=model,
                task=task_name,
                response="",
                latency_ms=latency_ms,
                status="error",
                error_message=str(e)
            )
            raise

        latency_ms = (time.time() - start_time) * 1000
        log_llm_response(
            model=model,
            task=task_name,
            response=response,
            latency_ms=latency_ms
        )
        return response

    async def _request_json(
        self,
        method: str,
        path: str,
        label: str,
        json_body: Optional[Dict[str, Any]] = None,
        error_body_limit: int = GENERATE_ERROR_BODY_LIMIT
    ) -> Any:
        """Issue one request and decode the JSON body."""
        url = f"{self.config.base_url()}{path}"
        logger.debug(f"[OLLAMA] {method} {url}")

        try:
            session = await self.get_session()
            async with session.request(method, url, json=json_body) as r:
                if r.status >= 400:
                    raw = await r.content.read(error_body_limit)
                    detail = raw.decode("utf-8", errors="replace").strip()
                    raise ProtocolError(
                        f"ollama {label} request failed: {r.status} {r.reason}: {detail}"
                    )
                raw = await r.read()

        except asyncio.TimeoutError as e:
            logger.error(f"[OLLAMA] {label} timeout after {self.config.timeout}s | url={url}")
            raise ConnectivityError(
                f"ollama {label} request timed out after {self.config.timeout:g}s"
            ) from e

        except aiohttp.ClientError as e:
            logger.error(f"[OLLAMA] {label} request failed | url={url} | error={e}")
            raise ConnectivityError(f"ollama {label} request failed: {e}") from e

        try:
            # undecodable bytes raise UnicodeDecodeError, a ValueError
            return json.loads(raw)
        except ValueError as e:
            raise ProtocolError(f"ollama {label} returned invalid JSON: {e}") from e
