import logging
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the LIGHTBNB_ prefix.
    Example: LIGHTBNB_DB_HOST=db.internal LIGHTBNB_DB_PASSWORD=secret
    """
    model_config = {"env_prefix": "LIGHTBNB_"}

    # Database connection
    db_user: str = "lightbnb"
    db_password: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "lightbnb"
    db_url: Optional[str] = None  # Full URL, takes precedence over the parts above
    pool_size: int = 5

    # Queries
    default_limit: int = 10

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @property
    def database_url(self) -> str:
        """Render the connection URL, preferring an explicit db_url."""
        if self.db_url:
            return self.db_url
        url = URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


settings = Settings()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Optional[Settings] = None) -> None:
    """Send log records to stderr and, when ``log_file`` is set, to that file too."""
    config = config or settings
    level = logging.getLevelName(config.log_level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
