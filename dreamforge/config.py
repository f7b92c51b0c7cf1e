import os
from typing import NamedTuple

from dotenv import load_dotenv
load_dotenv()


def get_env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None: return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None: return default
    try:
        return float(value)
    except ValueError:
        return default


def get_env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None: return default
    return value.lower() in ('true', '1', 't', 'yes', 'y')


class PhaseBudget(NamedTuple):
    thinking_budget: int
    max_output_tokens: int


class Config:
    # Project paths
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    PROJECT_ROOT = os.path.dirname(BASE_DIR)
    OUTPUT_DIR = os.getenv("FORGE_OUTPUT_DIR", os.path.join(PROJECT_ROOT, "output_games"))

    SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_key")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- LLM API Keys ---
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")
    GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    MISTRAL_API_KEY = os.getenv("MISTRAL_API_KEY")
    DEEPSEEK_API_KEY = os.getenv("DEEPSEEK_API_KEY")

    # --- LLM Models ---
    GROQ_MODEL_NAME = os.getenv("GROQ_MODEL_NAME", "llama-3.3-70b-versatile")
    GOOGLE_MODEL_NAME = os.getenv("GOOGLE_MODEL_NAME", "gemini-2.5-pro")
    OPENAI_MODEL_NAME = os.getenv("OPENAI_MODEL_NAME", "gpt-4o-mini")
    MISTRAL_MODEL_NAME = os.getenv("MISTRAL_MODEL_NAME", "codestral-latest")
    DEEPSEEK_MODEL_NAME = os.getenv("DEEPSEEK_MODEL_NAME", "deepseek-chat")

    # --- OLLAMA ---
    OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/v1")
    OLLAMA_MODEL_NAME = os.getenv("OLLAMA_MODEL_NAME", "llama3:8b")

    # --- Forge ---
    FORGE_PROVIDER = os.getenv("FORGE_PROVIDER", "google")
    FORGE_MODEL_NAME = os.getenv("FORGE_MODEL_NAME")
    FORGE_TEMPERATURE = get_env_float("FORGE_TEMPERATURE", 0.7)

    # Per-phase reasoning/output sizing. Quantize is cheap; build and refine
    # must fit a whole single-file game.
    QUANTIZE_THINKING_BUDGET = get_env_int("QUANTIZE_THINKING_BUDGET", 1024)
    QUANTIZE_MAX_OUTPUT_TOKENS = get_env_int("QUANTIZE_MAX_OUTPUT_TOKENS", 16384)
    ARCHITECT_THINKING_BUDGET = get_env_int("ARCHITECT_THINKING_BUDGET", 2048)
    ARCHITECT_MAX_OUTPUT_TOKENS = get_env_int("ARCHITECT_MAX_OUTPUT_TOKENS", 32768)
    SOUNDSCAPE_THINKING_BUDGET = get_env_int("SOUNDSCAPE_THINKING_BUDGET", 2048)
    SOUNDSCAPE_MAX_OUTPUT_TOKENS = get_env_int("SOUNDSCAPE_MAX_OUTPUT_TOKENS", 32768)
    BUILD_THINKING_BUDGET = get_env_int("BUILD_THINKING_BUDGET", 4096)
    BUILD_MAX_OUTPUT_TOKENS = get_env_int("BUILD_MAX_OUTPUT_TOKENS", 65536)
    REFINE_THINKING_BUDGET = get_env_int("REFINE_THINKING_BUDGET", 4096)
    REFINE_MAX_OUTPUT_TOKENS = get_env_int("REFINE_MAX_OUTPUT_TOKENS", 65536)

    # --- Frontend ---
    SAVE_GENERATED_FILES = get_env_bool("SAVE_GENERATED_FILES", True)
    PORT = get_env_int("PORT", 5000)

    def budget_for(self, phase: str) -> PhaseBudget:
        prefix = phase.upper()
        return PhaseBudget(
            thinking_budget=getattr(self, f"{prefix}_THINKING_BUDGET"),
            max_output_tokens=getattr(self, f"{prefix}_MAX_OUTPUT_TOKENS"),
        )

    def model_name_for(self, provider: str) -> str | None:
        if self.FORGE_MODEL_NAME:
            return self.FORGE_MODEL_NAME
        provider = provider.lower()
        if provider in ["google", "gemini"]:
            return self.GOOGLE_MODEL_NAME
        return getattr(self, f"{provider.upper()}_MODEL_NAME", None)


config = Config()
