import logging

from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI
from dreamforge.config import config

logger = logging.getLogger(__name__)

OPENAI_COMPATIBLE_ENDPOINTS = {
    "groq": ("https://api.groq.com/openai/v1", "GROQ_API_KEY"),
    "mistral": ("https://api.mistral.ai/v1", "MISTRAL_API_KEY"),
    "deepseek": ("https://api.deepseek.com", "DEEPSEEK_API_KEY"),
}


def get_langchain_model(
        provider: str = "google",
        model_name: str = None,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        thinking_budget: int = None,
        json_mode: bool = False,
        top_p: float = None,
        top_k: int = None,
):
    """
    Factory to get a LangChain ChatModel instance based on provider.
    Sized per request: the caller passes the phase's output and reasoning budget.
    """
    provider = provider.lower()
    model_name = model_name or config.model_name_for(provider)

    # --- 1. Google Gemini ---
    # The only back end with a native reasoning budget and JSON response mode.
    if provider in ["google", "gemini"]:
        extra = {}
        if thinking_budget is not None:
            extra["thinking_budget"] = thinking_budget
        if json_mode:
            extra["response_mime_type"] = "application/json"
        return ChatGoogleGenerativeAI(
            model=model_name or "gemini-2.5-pro",
            google_api_key=config.GOOGLE_API_KEY,
            temperature=temperature,
            max_output_tokens=max_tokens,
            top_p=top_p,
            top_k=top_k,
            **extra
        )

    # --- 2. OpenAI (Native) ---
    if provider == "openai":
        return ChatOpenAI(
            model=model_name or "gpt-4o-mini",
            api_key=config.OPENAI_API_KEY,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
        )

    # --- 3. Ollama (Local) ---
    if provider == "ollama":
        base_url = config.OLLAMA_BASE_URL
        if base_url and base_url.endswith("/v1"):
            base_url = base_url[:-3]

        from langchain_ollama import ChatOllama
        return ChatOllama(
            model=model_name or "llama3:8b",
            base_url=base_url,
            temperature=temperature,
            num_predict=max_tokens,
            top_p=top_p,
            top_k=top_k,
            format="json" if json_mode else None,
        )

    # --- 4. OpenAI-compatible hosts (Groq, Mistral, DeepSeek) ---
    if provider in OPENAI_COMPATIBLE_ENDPOINTS:
        base_url, key_attr = OPENAI_COMPATIBLE_ENDPOINTS[provider]
        return ChatOpenAI(
            model=model_name,
            api_key=getattr(config, key_attr),
            base_url=base_url,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
        )

    # --- Default Fallback ---
    logger.warning(f"[ModelFactory] Provider '{provider}' not explicitly supported. Falling back to OpenAI Default.")
    return ChatOpenAI(
        model="gpt-4o-mini",
        api_key=config.OPENAI_API_KEY,
        temperature=temperature,
        max_tokens=max_tokens,
        top_p=top_p,
    )
