import os
from dotenv import load_dotenv


load_dotenv()

# Use SQLite for development, but allow override for production
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./hospital.db")

HOSPITAL_NAME = os.environ.get("HOSPITAL_NAME", "Aadhunika Multispeciality Hospital")
SITE_URL = os.environ.get("SITE_URL", "http://localhost:8000")
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

# Admin back office (single credential pair, cookie flag)
ADMIN_LOGIN_EMAIL = os.environ.get("ADMIN_LOGIN_EMAIL", "admin@hospital.com")
ADMIN_LOGIN_PASSWORD = os.environ.get("ADMIN_LOGIN_PASSWORD", "admin123")
ADMIN_COOKIE_NAME = "admin-auth"
ADMIN_SESSION_MAX_AGE = 60 * 60 * 2

# SMTP relay for transactional email
EMAIL_USER = os.environ.get("EMAIL_USER")
EMAIL_PASS = os.environ.get("EMAIL_PASS")
SMTP_HOST = os.environ.get("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.environ.get("SMTP_PORT", 587))
ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL") or EMAIL_USER

# Razorpay
RAZORPAY_KEY_ID = os.environ.get("RAZORPAY_KEY_ID")
RAZORPAY_KEY_SECRET = os.environ.get("RAZORPAY_KEY_SECRET")
PAYMENT_CURRENCY = os.environ.get("PAYMENT_CURRENCY", "INR")

# Zoom server-to-server OAuth app
ZOOM_ACCOUNT_ID = os.environ.get("ZOOM_ACCOUNT_ID")
ZOOM_CLIENT_ID = os.environ.get("ZOOM_CLIENT_ID")
ZOOM_CLIENT_SECRET = os.environ.get("ZOOM_CLIENT_SECRET")
ZOOM_TIMEZONE = os.environ.get("ZOOM_TIMEZONE", "Asia/Kolkata")

# S3-compatible bucket for hero/specialist images
STORAGE_ENDPOINT_URL = os.environ.get("STORAGE_ENDPOINT_URL")
STORAGE_ACCESS_KEY_ID = os.environ.get("STORAGE_ACCESS_KEY_ID")
STORAGE_SECRET_ACCESS_KEY = os.environ.get("STORAGE_SECRET_ACCESS_KEY")
STORAGE_BUCKET = os.environ.get("STORAGE_BUCKET", "hospital")
STORAGE_PUBLIC_URL = os.environ.get("STORAGE_PUBLIC_URL")
