from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./glasspos.db"
    COMPANY_NAME: str = "GlassPOS Workshop"
    CURRENCY: str = "EGP"

    # Unit assumed for raw dimensions when a request omits one
    DEFAULT_DIMENSION_UNIT: str = "MM"

    # "fail" -> RateNotFound outside configured tiers, "nearest" -> closest tier
    RATE_BOUNDARY_POLICY: str = "fail"

    # Insert default beveling tiers and glass types into empty tables on startup
    SEED_DEFAULTS: bool = True

    class Config:
        env_file = ".env"


settings = Settings()
