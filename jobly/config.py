from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / ".jobly"
    # Signing key for bearer tokens. Override in every real deployment.
    secret_key: str = "secret-dev"
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 86400  # 0 disables expiry
    # argon2 cost parameters; tests lower these to keep hashing fast.
    password_time_cost: int = 3
    password_memory_cost: int = 65536
    api_prefix: str = ""
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def db_path(self) -> Path:
        return self.data_path / "jobly.sqlite"

    model_config = {"env_prefix": "JOBLY_"}


settings = Settings()
