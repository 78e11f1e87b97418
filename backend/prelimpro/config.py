"""
Prelimpro - Runtime Configuration
All settings are read from environment variables with development defaults.
"""
import os

# Database
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{os.getenv('USER', 'postgres')}@localhost:5432/prelimpro"
)

# Auth
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "prelimpro-secret-key-change-in-production")
ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))
INTERNAL_API_KEY = os.getenv("INTERNAL_API_KEY", "scheduler-internal-key-change-in-production")

# Stripe
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")
STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET", "")
STRIPE_SUCCESS_URL = os.getenv(
    "STRIPE_SUCCESS_URL",
    "https://premiumlien.com/success?session_id={CHECKOUT_SESSION_ID}"
)
STRIPE_CANCEL_URL = os.getenv("STRIPE_CANCEL_URL", "https://premiumlien.com/cancel")

# Expo push
EXPO_PUSH_URL = os.getenv("EXPO_PUSH_URL", "https://exp.host/--/api/v2/push/send")
EXPO_RECEIPTS_URL = os.getenv("EXPO_RECEIPTS_URL", "https://exp.host/--/api/v2/push/getReceipts")
EXPO_ACCESS_TOKEN = os.getenv("EXPO_ACCESS_TOKEN", "")
PUSH_TIMEOUT_SECONDS = float(os.getenv("PUSH_TIMEOUT_SECONDS", "30"))

# Service
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
