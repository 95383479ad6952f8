import os

from config.config import SCHOOL_ID, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="root")

DEBUG = True

# If enabled, the app applies schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")

SCHOOL_ID = SCHOOL_ID or "demo-school"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
