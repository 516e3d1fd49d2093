from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGO_DB_URI: str = "mongodb://localhost:27017/admin_workflow"
    MONGO_MAX_POOL_SIZE: int = 20
    MONGO_MIN_POOL_SIZE: int = 0
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 20000
    MONGO_CONNECT_TIMEOUT_MS: int = 20000
    MONGO_SOCKET_TIMEOUT_MS: int = 45000

    # must match the secret the login service signs tokens with
    JWT_SECRET_KEY: str = "dev-secret-change-me-before-deploying-anywhere"
    JWT_ALGORITHM: str = "HS256"

    API_PREFIX: str = ""
    LOG_LEVEL: str = "INFO"


settings = Settings()
