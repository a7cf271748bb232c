import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import dotenv_values, load_dotenv

from tablesnap.logging_config import logger

REPO_DIR = Path(__file__).resolve().parent.parent
APP_VERSION = "1.0.0"

SUPPORTED_PROVIDERS = ("openai", "gemini")

DEFAULT_MODELS: dict[str, dict[str, str]] = {
    "openai": {"extraction": "gpt-4o", "edit": "gpt-image-1"},
    "gemini": {"extraction": "gemini-2.5-flash", "edit": "gemini-2.5-flash-image"},
}

PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


def load_environment(env_path: Path | None = None) -> None:
    repo_env = env_path or REPO_DIR / ".env"
    if not repo_env.exists():
        return
    load_dotenv(dotenv_path=repo_env, override=True)
    # Ensure variables are available even if the process started without them.
    for key, value in dotenv_values(repo_env).items():
        if value is not None:
            os.environ.setdefault(key, value)


def _resolve_api_key(provider: str) -> str:
    api_key = os.getenv("TABLESNAP_API_KEY", "").strip()
    if api_key:
        return api_key
    fallback_env = PROVIDER_KEY_ENV.get(provider)
    if fallback_env:
        return os.getenv(fallback_env, "").strip()
    return ""


def _env_number(name: str, default: float, cast: type, issues: list[str]) -> Any:
    raw = os.getenv(name, "").strip()
    if not raw:
        return cast(default)
    try:
        return cast(raw)
    except ValueError:
        issues.append(f"{name} must be a number, got '{raw}'; using {cast(default)}.")
        return cast(default)


@dataclass(frozen=True)
class Settings:
    app_name: str = "TableSnap Studio"
    version: str = APP_VERSION
    provider: str = "openai"
    api_key: str = field(default="", repr=False)
    extraction_model: str = DEFAULT_MODELS["openai"]["extraction"]
    edit_model: str = DEFAULT_MODELS["openai"]["edit"]
    request_timeout: float = 120.0
    max_image_bytes: int = 10 * 1024 * 1024
    env_issues: tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "Settings":
        provider = os.getenv("TABLESNAP_PROVIDER", "openai").strip().lower() or "openai"
        models = DEFAULT_MODELS.get(provider, DEFAULT_MODELS["openai"])
        env_issues: list[str] = []
        request_timeout = _env_number("TABLESNAP_REQUEST_TIMEOUT", 120.0, float, env_issues)
        max_image_bytes = _env_number(
            "TABLESNAP_MAX_IMAGE_BYTES", 10 * 1024 * 1024, int, env_issues
        )
        return cls(
            app_name=os.getenv("TABLESNAP_APP_NAME", "TableSnap Studio"),
            provider=provider,
            api_key=_resolve_api_key(provider),
            extraction_model=os.getenv("TABLESNAP_EXTRACTION_MODEL", "").strip()
            or models["extraction"],
            edit_model=os.getenv("TABLESNAP_EDIT_MODEL", "").strip() or models["edit"],
            request_timeout=request_timeout,
            max_image_bytes=max_image_bytes,
            env_issues=tuple(env_issues),
        )

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key.strip())


def validate_settings(settings: Settings) -> list[str]:
    """Start-up checks; an empty list means the app can issue requests."""
    issues: list[str] = list(settings.env_issues)
    if settings.provider not in SUPPORTED_PROVIDERS:
        issues.append(
            f"Unknown provider '{settings.provider}'. Use one of: {', '.join(SUPPORTED_PROVIDERS)}."
        )
    if not settings.has_credential:
        key_env = PROVIDER_KEY_ENV.get(settings.provider, "TABLESNAP_API_KEY")
        issues.append(f"Missing API key: set TABLESNAP_API_KEY or {key_env}.")
    if settings.request_timeout <= 0:
        issues.append("TABLESNAP_REQUEST_TIMEOUT must be positive.")
    if settings.max_image_bytes <= 0:
        issues.append("TABLESNAP_MAX_IMAGE_BYTES must be positive.")

    if issues:
        for issue in issues:
            logger.warning("Configuration issue: %s", issue)
    else:
        logger.info(
            "Configuration validated provider=%s extraction_model=%s edit_model=%s",
            settings.provider,
            settings.extraction_model,
            settings.edit_model,
        )
    return issues
