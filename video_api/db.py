# video_api/db.py
import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, declarative_base
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential, before_log, after_log

from .config import Settings

logger = logging.getLogger(__name__)

# ✅ 統一 model Base class
Base = declarative_base()

INIT_DB_ATTEMPTS = 3


# ✅ 建立 engine，所有 request 共用同一個連線池
def create_db_engine(settings: Settings) -> Engine:
    logger.info(f"Using Database URL: {settings.safe_database_url}")
    return create_engine(
        settings.database_url,
        pool_size=settings.DB_POOL_SIZE,          # 連線池大小
        max_overflow=settings.DB_MAX_OVERFLOW,    # 允許的溢出連接數
        pool_timeout=settings.DB_POOL_TIMEOUT,    # 獲取連接的超時時間
        pool_recycle=settings.DB_POOL_RECYCLE,    # 連接回收時間（秒）
        pool_pre_ping=True,
    )


# ✅ 建立 session factory
def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# 初始化資料庫，建立所有定義的表格
@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(INIT_DB_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=2, max=8),  # 指數退避
    before=before_log(logger, logging.INFO),
    after=after_log(logger, logging.ERROR),
    reraise=True,
)
def init_db(engine: Engine):
    # models must be imported so their tables are registered on Base
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("✅ Database initialized successfully")


# ✅ 給 router 調用用的 Session dependency
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
