from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = "Comment Card Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    # Public origin used to build preview URLs (e.g. https://cards.example.com)
    SITE_URL: str = ""

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    USER_DATA_DIR: Path = BASE_DIR / "user_data"

    # YouTube Data API v3
    YOUTUBE_API_KEY: str = ""  # Set via .env: YOUTUBE_API_KEY=AIza...
    YOUTUBE_API_URL: str = "https://www.googleapis.com/youtube/v3"
    YOUTUBE_TIMEOUT: float = 10.0
    YOUTUBE_DAILY_LIMIT: int = 1000

    # Quota store (Redis). Empty URL -> in-process counter (dev only)
    REDIS_URL: str = ""  # e.g. rediss://default@eu1-xxx.upstash.io:6379
    REDIS_TOKEN: str = ""
    QUOTA_TTL_SECONDS: int = 60 * 60 * 25

    # Rendering
    DEFAULT_RENDERER: str = "pillow"  # pillow | browser
    RENDER_TIMEOUT: float = 30.0
    BROWSER_EXECUTABLE_PATH: str = ""
    BROWSER_MAX_CONCURRENCY: int = 2
    FONT_PATH: str = "DejaVuSans.ttf"
    FONT_BOLD_PATH: str = "DejaVuSans-Bold.ttf"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def model_post_init(self, __context):
        self.init_dirs()

    @property
    def LOG_DIR(self) -> Path:
        return self.USER_DATA_DIR / "logs"

    def init_dirs(self):
        """Ensure critical directories exist."""
        self.LOG_DIR.mkdir(parents=True, exist_ok=True)

settings = Settings()
