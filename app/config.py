from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./clients.db"
    secret_key: str = "replace-with-a-long-random-secret-key"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    remember_me_expire_days: int = 30  # "stay signed in"
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    # Secure flag on the session cookie is always set in production.
    cookie_secure: bool = False

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    client_page_size: int = 10

    # Password reset
    reset_token_expire_minutes: int = 60
    frontend_url: str = "http://localhost:3000"

    # Mail: "smtp" sends through the relay below, "console" only logs the message.
    mail_backend: str = "console"
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    mail_from: str = "no-reply@example.com"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        return (self.app_env or "development").lower() in {"production", "prod"}


settings = Settings()
