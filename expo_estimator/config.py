from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./estimates.db"
    COMPANY_NAME: str = "EaseMyExpo"
    COMPANY_TAGLINE: str = "Redefining the future of exhibitions"
    COMPANY_EMAIL: str = "hello@easemyexpo.in"
    COMPANY_PHONE: str = "+91 9321522751"
    COMPANY_ADDRESS: str = "Maruthi Layout, Karnataka 560024"

    # Money is unit-less in the calculators; these only drive display
    CURRENCY: str = "INR"
    CURRENCY_SYMBOL: str = "Rs."

    # Fixed inputs to the simplified combiner
    MARKETING_COST_DEFAULT: float = 25000.0
    LOGISTICS_COST_DEFAULT: float = 15000.0
    QUOTE_VALID_DAYS: int = 30

    # Admin auth
    JWT_SECRET: str = ""  # Required in production, auth endpoints return 500 without it
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRE_MINUTES: int = 60

    class Config:
        env_file = ".env"


settings = Settings()
