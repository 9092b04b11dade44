from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "gitgrab"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    VALIDATOR_PROVIDER: str = "auto"  # auto | github | gemini | ollama
    VALIDATION_TIMEOUT_SECONDS: float = 30

    GITHUB_TOKEN: str | None = None
    GITHUB_API_BASE: str = "https://api.github.com"

    GEMINI_API_KEY: str | None = None
    GEMINI_CHAT_MODEL: str = "gemini-2.0-flash"

    OLLAMA_MODEL: str = "qwen2.5-coder:7b-instruct"
    OLLAMA_BASE_URL: str = "http://127.0.0.1:11434"

    # fixed-delay stand-in for a real clone
    CLONE_SIMULATION_SECONDS: float = 2.0
    MAX_FORM_SESSIONS: int = 500
    HEALTH_GITHUB_CACHE_SECONDS: float = 300

settings = Settings()
