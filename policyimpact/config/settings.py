from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Confidence heuristic: no caveats vs. at least one caveat
    confidence_complete: float = 0.9
    confidence_with_caveats: float = 0.7

    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    class Config:
        env_file = ".env"
        env_prefix = "POLICYIMPACT_"
