"""Configuration constants and models for gitbuddy.

User settings are stored in ~/.gitbuddy/config.yaml.
Use 'gitbuddy config' commands to modify them.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Vendor(Enum):
    """Supported model vendors (all speak the OpenAI-compatible chat API)."""

    OPENAI = "openai"
    DEEPSEEK = "deepseek"
    OLLAMA = "ollama"


class UsageMode(Enum):
    """How per-chunk usage records are folded into the running totals.

    INCREMENTAL: each chunk reports its own contribution; values are added.
    CUMULATIVE: each chunk reports a running snapshot; totals track the largest one.
    """

    INCREMENTAL = "incremental"
    CUMULATIVE = "cumulative"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used only if ~/.gitbuddy/config.yaml doesn't set them

DEFAULT_VENDOR = Vendor.DEEPSEEK
DEFAULT_TIMEOUT = 120
DEFAULT_WRAP_WIDTH = 100
DEFAULT_LANGUAGE = "english"
DEFAULT_NUMBER = 3
DEFAULT_USAGE_MODE = UsageMode.INCREMENTAL

DEFAULT_BASE_URLS = {
    Vendor.OPENAI: "https://api.openai.com/v1",
    Vendor.DEEPSEEK: "https://api.deepseek.com/v1",
    Vendor.OLLAMA: "http://localhost:11434/v1",
}

# ============================================================
# AVAILABLE MODELS PER VENDOR
# ============================================================

AVAILABLE_MODELS = {
    Vendor.OPENAI: [
        "gpt-4o-mini",
        "gpt-4o",
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-3.5-turbo",
    ],
    Vendor.DEEPSEEK: [
        "deepseek-chat",
        "deepseek-reasoner",
    ],
    Vendor.OLLAMA: [
        "qwen2.5-coder",
        "deepseek-r1",
        "llama3.2",
        "mistral",
    ],
}

# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    Vendor.OPENAI: "OPENAI_API_KEY",
    Vendor.DEEPSEEK: "DEEPSEEK_API_KEY",
    Vendor.OLLAMA: "OLLAMA_API_KEY",
}

# Local servers accept unauthenticated requests
VENDORS_WITHOUT_KEY = {Vendor.OLLAMA}


def get_api_key_env_var(vendor: Vendor) -> str:
    """Get the environment variable name for the API key.

    Args:
        vendor: The model vendor.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[vendor]


def default_model(vendor: Vendor) -> str:
    """Get the default model for a vendor (first entry of AVAILABLE_MODELS)."""
    return AVAILABLE_MODELS[vendor][0]


class ModelParameters(BaseModel):
    """Sampling options sent with every request."""

    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    top_p: float = Field(default=0.75, ge=0.0, le=1.0)
    top_k: int = Field(default=5, ge=0)
    max_tokens: int = Field(default=1024, gt=0)


class ModelConfig(BaseModel):
    """Endpoint settings for one vendor.

    Attributes:
        vendor: The vendor this configuration belongs to.
        model: Model identifier sent in the request.
        base_url: API root, e.g. https://api.openai.com/v1
        api_key: Bearer token, or None for unauthenticated endpoints.
    """

    vendor: Vendor
    model: str
    base_url: str
    api_key: Optional[str] = None

    @property
    def chat_completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"
