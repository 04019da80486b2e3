# zenscribe/config.py
import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

SUPPORTED_BACKENDS = ("openai", "ollama")


def _env_config() -> dict:
    return {
        "llm_backend": os.getenv("ZENSCRIBE_LLM_BACKEND", "openai"),
        "openai_api_key": os.getenv("OPENAI_API_KEY"),
        "openai_model": os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        "ollama_model": os.getenv("OLLAMA_MODEL", "llama3.2:latest"),
        "ollama_base_url": os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
        "temperature": float(os.getenv("ZENSCRIBE_TEMPERATURE", "0.7")),
        "data_dir": os.getenv("ZENSCRIBE_DATA_DIR", ".zenscribe"),
        "drafts_dir": os.getenv("ZENSCRIBE_DRAFTS_DIR", "data/drafts"),
        "log_file": os.getenv("ZENSCRIBE_LOG_FILE", "log.json"),
    }


def load_config(config_path: Optional[str] = None, env_file: Optional[str] = None) -> dict:
    """
    Load configuration from the environment (and .env), then overlay an
    optional JSON config file.
    """
    load_dotenv(env_file)
    config = _env_config()

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with path.open("r", encoding="utf-8") as f:
            config.update(json.load(f))

    backend = config["llm_backend"]
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported llm_backend: {backend}")

    required_keys = {
        "openai": ["openai_api_key", "openai_model"],
        "ollama": ["ollama_model", "ollama_base_url"],
    }[backend]

    for key in required_keys:
        if key not in config or not config[key]:
            raise ValueError(f"Missing required config key: {key}")

    return config
