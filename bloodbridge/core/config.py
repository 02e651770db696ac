# bloodbridge/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    app_name: str = "BloodBridge API"
    jwt_secret: str = "dev"
    jwt_alg: str = "HS256"
    access_ttl_min: int = 60 * 24
    use_mongo: bool = False
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "bloodbridge"
    min_password_length: int = 6
    recent_days: int = 7
    event_buffer: int = 1000
    log_level: str = "INFO"

    # client side
    api_base: str = "http://127.0.0.1:8000"
    session_file: str = "~/.bloodbridge/session.json"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
