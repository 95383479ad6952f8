import os


def db_config_from_env(*, default_password: str = "") -> dict:
    """mysql-connector settings read from DB_* environment variables."""
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "school_payroll"),
    }


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


# School whose payroll this deployment runs (organization context).
SCHOOL_ID = os.getenv("SCHOOL_ID") or None
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
