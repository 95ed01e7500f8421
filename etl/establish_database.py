"""Create the video tables without starting the API server.

Run from the repository root with ``python -m etl.establish_database`` so the
``video_api`` package is importable, or install the project first.
"""
import logging
import sys

from video_api.config import ConfigurationError, Settings
from video_api.db import create_db_engine, init_db

logger = logging.getLogger(__name__)


def main():
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return 1

    engine = create_db_engine(settings)
    try:
        init_db(engine)
    finally:
        engine.dispose()
    print("✅ 成功建立 videos 資料表！")
    return 0


if __name__ == "__main__":
    sys.exit(main())
