from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    # Database
    database_url: str

    # App
    app_name: str = 'Periodic Tables Reservations'
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Restaurant
    restaurant_timezone: str = "UTC"
    opening_time: str = "10:30"
    closing_time: str = "21:30"
    # 0 = Montag ... 6 = Sonntag
    closed_weekday: int = 1


settings = Settings()
