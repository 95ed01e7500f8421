import os
import logging
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# 設定日誌系統
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = (
    "PGDB",
    "PGUSER",
    "PGPASSWORD",
    "PGHOST",
    "QUEUE_TOPIC",
    "UPLOAD_FOLDER_PATH",
)

# 64 << 25 bytes, the multipart limit of the original service
DEFAULT_MAX_UPLOAD_SIZE = 64 << 25


class ConfigurationError(ValueError):
    """Raised when a required environment variable is missing."""


@dataclass(frozen=True)
class Settings:
    # 資料庫設定
    PGDB: str
    PGUSER: str
    PGPASSWORD: str
    PGHOST: str

    # Declared for the transcoding trigger; nothing publishes to it yet.
    QUEUE_TOPIC: str

    # 上傳目錄
    UPLOAD_FOLDER_PATH: str

    PGPORT: int = 5432

    # API 基本設定
    API_TITLE: str = "Video Backend API"
    API_VERSION: str = "1.0"
    API_DESCRIPTION: str = "Video metadata records and file uploads"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # 資料庫連線池設定
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    MAX_UPLOAD_SIZE: int = DEFAULT_MAX_UPLOAD_SIZE

    # CORS 設定（跨域資源共享）
    CORS_ORIGINS: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ=None, dotenv: bool = True) -> "Settings":
        """Build settings from the process environment.

        A ``.env`` file in the working directory is loaded first unless
        ``dotenv`` is false. Every name in ``REQUIRED_VARIABLES`` must be set
        to a non-empty value.
        """
        if dotenv:
            load_dotenv()
        env = os.environ if environ is None else environ

        values = {}
        for name in REQUIRED_VARIABLES:
            value = env.get(name, "")
            if not value:
                raise ConfigurationError(f"No {name} environment variable")
            values[name] = value

        origins = env.get("CORS_ORIGINS", "*")

        return cls(
            PGPORT=int(env.get("PGPORT", "5432")),
            DEBUG=env.get("DEBUG", "False").lower() == "true",
            HOST=env.get("HOST", "0.0.0.0"),
            PORT=int(env.get("PORT", "8080")),
            DB_POOL_SIZE=int(env.get("DB_POOL_SIZE", "5")),
            DB_MAX_OVERFLOW=int(env.get("DB_MAX_OVERFLOW", "10")),
            DB_POOL_TIMEOUT=int(env.get("DB_POOL_TIMEOUT", "30")),
            DB_POOL_RECYCLE=int(env.get("DB_POOL_RECYCLE", "1800")),
            MAX_UPLOAD_SIZE=int(env.get("MAX_UPLOAD_SIZE", str(DEFAULT_MAX_UPLOAD_SIZE))),
            CORS_ORIGINS=[o.strip() for o in origins.split(",") if o.strip()],
            **values,
        )

    @property
    def database_url(self) -> URL:
        return URL.create(
            "postgresql+psycopg2",
            username=self.PGUSER,
            password=self.PGPASSWORD,
            host=self.PGHOST,
            port=self.PGPORT,
            database=self.PGDB,
        )

    @property
    def safe_database_url(self) -> str:
        return self.database_url.render_as_string(hide_password=True)

    def log_config(self):
        """記錄重要配置信息，但隱藏敏感資訊"""
        logger.info(f"Database URL: {self.safe_database_url}")
        logger.info(f"Upload folder: {self.UPLOAD_FOLDER_PATH}")
        logger.info(f"Queue topic: {self.QUEUE_TOPIC}")
        logger.info(f"Max upload size: {self.MAX_UPLOAD_SIZE} bytes")
        logger.info(f"API Version: {self.API_VERSION}")
        logger.info(f"Debug Mode: {self.DEBUG}")
        # 警告如果 CORS 設定為允許所有來源
        if "*" in self.CORS_ORIGINS:
            logger.warning("Warning: CORS is set to allow all origins (*)")
