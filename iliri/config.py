from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    # App
    app_name: str = 'Iliri'
    debug: bool = False
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_dir: str = "logs"
    log_file: str = "app.log"

    # Session-Flag (einziger persistierter Zustand)
    session_file: str = "auth-storage.json"
    session_key: str = "auth-storage"
    login_name: str = "admin"
    login_password: str = "password123"

    # Dashboard
    top_limit: int = 10
    inventory_value_active_only: bool = False

    # Codes für Lieferanten/Kunden
    code_length: int = 8
    code_max_attempts: int = 100

    # Absender für PDFs
    company_name: str = "Iliri"
    company_address: str = ""
    company_city: str = ""
    company_phone: str = ""
    company_email: str = ""


settings = Settings()
