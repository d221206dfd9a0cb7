from pydantic_settings import BaseSettings
from typing import List, Dict, Any
import json
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


def parse_tier_benefits(v: str) -> Dict[str, List[str]]:
    """Parse tier benefits from format: tier:benefit|benefit;tier:benefit"""
    if not v:
        return {}
    benefits = {}
    for block in v.split(';'):
        if ':' not in block:
            continue
        tier, items = block.split(':', 1)
        benefits[tier.strip()] = [item.strip() for item in items.split('|') if item.strip()]
    return benefits


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Ministry Hub"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes
    DB_ECHO: bool = False

    # ==========================================
    # Redis (rate limit storage; empty = in-memory)
    # ==========================================
    REDIS_URL: str = ""

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12  # 4 for dev (fast), 12 for prod (secure)

    # ==========================================
    # AI (Claude) - empty key disables AI features
    # ==========================================
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_BASE_URL: str = ""
    AI_MODEL: str = "claude-3-5-haiku-20241022"
    AI_MAX_TOKENS: int = 600
    AI_TEMPERATURE: float = 0.3
    AI_REQUEST_TIMEOUT: int = 60
    AI_CONNECT_TIMEOUT: int = 15
    AI_MAX_RETRIES: int = 3
    AI_RETRY_BASE_DELAY: float = 1.0
    AI_RETRY_MAX_DELAY: float = 10.0

    # ==========================================
    # Frontend
    # ==========================================
    FRONTEND_URL: str = "http://localhost:3000"

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024  # 10MB

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    # ==========================================
    # Library
    # ==========================================
    LIBRARY_SHELF_SIZE: int = 12
    LIBRARY_RECENT_DAYS: int = 30

    # ==========================================
    # Leads
    # ==========================================
    LEAD_RESCORE_DAYS: int = 7
    LEAD_SCORE_BATCH_LIMIT: int = 50

    # ==========================================
    # Giving
    # ==========================================
    GIVING_WEBHOOK_SECRET: str = ""
    GIVING_CURRENCY: str = "usd"
    MIN_DONATION_AMOUNT: float = 1.00

    # ==========================================
    # Membership tiers (format: tier:benefit|benefit;tier:...)
    # ==========================================
    TIER_BENEFITS: str = (
        "free:Sermon archive|Public prophetic words|Prayer journal;"
        "member:Member teachings|Family management|Live service chat;"
        "partner:Partner teachings and e-books|Course certificates;"
        "covenant:Full library access|Personal prophecy tracking|Covenant gatherings"
    )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._base_dir = Path(__file__).resolve().parent.parent.parent
        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)

    @property
    def BASE_DIR(self) -> Path:
        return self._base_dir

    @property
    def ai_enabled(self) -> bool:
        return bool(self.ANTHROPIC_API_KEY and self.ANTHROPIC_API_KEY.strip())

    def get_tier_benefits(self) -> Dict[str, List[str]]:
        """Get tier benefits as a dictionary"""
        return parse_tier_benefits(self.TIER_BENEFITS)

    def is_dev_mode(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT == "development" or self.DEBUG


# Create settings instance
settings = Settings()
