from config.config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="test")

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

SCHOOL_ID = "test-school"
LOG_LEVEL = "WARNING"
