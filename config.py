import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///intervue.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # bound every store call; the default sqlite/pg drivers otherwise wait forever
    DATABASE_TIMEOUT_SEC = int(os.getenv("DATABASE_TIMEOUT_SEC", "10"))
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_timeout": DATABASE_TIMEOUT_SEC,
    }
    INTERVIEW_DURATION_MINUTES = int(os.getenv("INTERVIEW_DURATION_MINUTES", "60"))
    NEW_INTERVIEWER_WINDOW_DAYS = int(os.getenv("NEW_INTERVIEWER_WINDOW_DAYS", "30"))
    SCHEDULING_GRACE_SECONDS = int(os.getenv("SCHEDULING_GRACE_SECONDS", "60"))
    UID_DOMAIN = os.getenv("UID_DOMAIN", "intervue.local")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    WTF_CSRF_ENABLED = False
    SECRET_KEY = "test-secret"
