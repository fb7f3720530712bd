# careerhub/core/config.py
from typing import Optional
from urllib.parse import urlparse

from pydantic import AnyUrl
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    SECRET_KEY: str = "change-me"  # override in .env / secrets
    LOG_LEVEL: str = "INFO"

    # Redis (AI flow result cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    AI_CACHE_TTL_SEC: int = 60 * 60 * 24

    # MongoDB
    MONGODB_URI: Optional[str] = "mongodb://localhost:27017/careerhub"
    MONGODB_DB: Optional[str] = "careerhub"
    # batches run inside a transaction only when the deployment is a replica set
    MONGODB_USE_TRANSACTIONS: bool = False

    # S3 / R2 (candidate documents)
    S3_BUCKET: Optional[str] = None
    S3_ENDPOINT: Optional[AnyUrl] = None
    S3_REGION: Optional[str] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None
    # public base url objects are served from, e.g. https://files.example.com
    S3_PUBLIC_BASE_URL: Optional[str] = None

    # CV text extraction
    CV_CACHE_STALE_DAYS: int = 30
    CV_MIN_READABLE_CHARS: int = 500
    CV_FETCH_TIMEOUT_SEC: float = 20.0
    CV_ALLOWED_DOMAINS: str = "firebasestorage.googleapis.com,storage.googleapis.com"

    # LLM
    LLM_API_KEY: Optional[str] = None
    # Adapter selection: 'mock', 'http' or 'gemini'
    LLM_ADAPTER: str = "mock"
    # HTTP adapter settings
    LLM_HTTP_URL: Optional[AnyUrl] = None
    LLM_TIMEOUT_SEC: int = 20
    LLM_RETRIES: int = 2
    LLM_BACKOFF_FACTOR: float = 0.5
    # allow fallback to mock adapter when the configured adapter fails
    LLM_ALLOW_FALLBACK: bool = True
    # Gemini adapter settings
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Seeder / maintenance
    ENABLE_SEED: bool = False
    SEED_SECRET: Optional[str] = None
    SEED_DEFAULT_PASSWORD: str = "12345678"

    # Access token expiry (minutes)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Pydantic v2 settings: read from .env file
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cv_allowed_domains(self) -> list[str]:
        """Hosts CV files may be fetched from: the configured list plus our own storage."""
        domains = [d.strip().lower() for d in self.CV_ALLOWED_DOMAINS.split(",") if d.strip()]
        hosts = []
        if self.S3_PUBLIC_BASE_URL:
            hosts.append(urlparse(self.S3_PUBLIC_BASE_URL).hostname)
        if self.S3_BUCKET:
            if self.S3_ENDPOINT:
                endpoint = urlparse(str(self.S3_ENDPOINT)).hostname
                # path-style and virtual-host style presigned URLs
                hosts += [endpoint, f"{self.S3_BUCKET}.{endpoint}" if endpoint else None]
            else:
                hosts.append(f"{self.S3_BUCKET}.s3.amazonaws.com")
                if self.S3_REGION:
                    hosts.append(f"{self.S3_BUCKET}.s3.{self.S3_REGION}.amazonaws.com")
        for host in hosts:
            if host and host.lower() not in domains:
                domains.append(host.lower())
        return domains

# single shared settings instance
settings = Settings()
