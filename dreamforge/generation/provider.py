"""
Provider capability: the single seam between the pipeline and a generative
model service. A provider takes a fully described request and returns raw
text; it never parses or validates the response.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from langchain_core.messages import SystemMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, ConfigDict, Field

from dreamforge.config import config
from dreamforge.generation.errors import ProviderError
from dreamforge.generation.model_factory import get_langchain_model

logger = logging.getLogger(__name__)


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: Optional[str] = None
    system_prompt: str
    contents: str
    response_schema: Dict[str, Any] = Field(default_factory=dict)
    thinking_budget: int = 1024
    max_output_tokens: int = 8192
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None


class Provider(ABC):
    @abstractmethod
    def generate(self, request: GenerationRequest) -> str:
        """Return the raw text response. Raise ProviderError on any failure."""


_QUOTA_MARKERS = ("429", "resource_exhausted", "resource has been exhausted", "rate limit", "quota", "too many requests")
_POLICY_MARKERS = ("safety", "content policy", "content_filter", "blocked", "prohibited")
_TRANSPORT_MARKERS = ("timeout", "timed out", "connection", "connect", "unavailable", "503", "502")


def classify_provider_error(error: Exception) -> str:
    if isinstance(error, (TimeoutError, ConnectionError)):
        return "transport"
    msg = f"{type(error).__name__} {error}".lower()
    if any(marker in msg for marker in _QUOTA_MARKERS):
        return "quota"
    if any(marker in msg for marker in _POLICY_MARKERS):
        return "policy"
    if any(marker in msg for marker in _TRANSPORT_MARKERS):
        return "transport"
    return "unknown"


class LangChainProvider(Provider):
    """
    Runs each request through a LangChain chat model built for that request.
    Holds no mutable state, so one instance can serve concurrent pipelines.
    """

    def __init__(
            self,
            provider_name: str = None,
            model_name: str = None,
            temperature: float = None,
            llm_factory: Callable[..., Any] = get_langchain_model,
    ):
        self.provider_name = provider_name or config.FORGE_PROVIDER
        self.model_name = model_name
        self.temperature = config.FORGE_TEMPERATURE if temperature is None else temperature
        self.llm_factory = llm_factory

    def _build_llm(self, request: GenerationRequest):
        return self.llm_factory(
            provider=self.provider_name,
            model_name=request.model or self.model_name,
            temperature=self.temperature if request.temperature is None else request.temperature,
            max_tokens=request.max_output_tokens,
            thinking_budget=request.thinking_budget,
            json_mode=bool(request.response_schema),
            top_p=request.top_p,
            top_k=request.top_k,
        )

    def generate(self, request: GenerationRequest) -> str:
        # Code context is passed as a variable so its braces are never read as template fields
        prompt = ChatPromptTemplate.from_messages([
            SystemMessage(content=request.system_prompt),
            ("user", "{contents}")
        ])
        try:
            chain = prompt | self._build_llm(request) | StrOutputParser()
            return chain.invoke({"contents": request.contents})
        except Exception as e:
            kind = classify_provider_error(e)
            logger.error(f"[Provider] {self.provider_name} request failed ({kind}): {e}")
            raise ProviderError(f"{self.provider_name} request failed: {e}", kind=kind) from e
