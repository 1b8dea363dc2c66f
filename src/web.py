# ABOUTME: ASGI web entry point for the fog assistant chat UI.
# ABOUTME: Creates a Starlette app via agent.to_web() with a model selection dropdown.

import logging
import os

from src.agent import agent
from src.deps import FogDeps, create_http_client

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

# Build the model selection dropdown for the web UI.
# The agent's default model is always included automatically by to_web().
# The string shorthand "openrouter:model_name" reads OPENROUTER_API_KEY from env.
_models: dict[str, str] = {
    "Claude Haiku 4.5": "openrouter:anthropic/claude-haiku-4.5",
    "Ministral 14B": "openrouter:mistralai/ministral-14b-2512",
}

# Include the default model from env var with a readable label
_default_model = os.environ.get("OPENROUTER_MODEL")
if _default_model and f"openrouter:{_default_model}" not in _models.values():
    _label = _default_model.split("/")[-1].replace("-", " ").title()
    _models[f"{_label} (Default)"] = f"openrouter:{_default_model}"

logger.info("Starting fog assistant with models: %s", ", ".join(_models))

app = agent.to_web(
    deps=FogDeps(http_client=create_http_client()),
    models=_models,
)
