"""
Shared configuration for the gateway, the store clients and the frontend.
Values come from the environment, with a local .env file loaded first.
"""

import os
from dotenv import load_dotenv

# Load .env only once here
load_dotenv()

# --- STORAGE ---
EVENTS_TABLE = os.getenv("EVENTS_TABLE", "Events")
STORE_BACKEND = os.getenv("STORE_BACKEND", "dynamodb").lower()
DATABASE_URL = os.getenv("DATABASE_URL")  # Only needed for the postgres backend

# --- NOTIFICATIONS ---
SNS_TOPIC_ARN = os.getenv("SNS_TOPIC_ARN", "arn:aws:sns:us-east-1:123456789012:EventNotifications")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")

# --- SERVERS ---
GATEWAY_PORT = int(os.getenv("GATEWAY_PORT", 5050))
FRONTEND_PORT = int(os.getenv("FRONTEND_PORT", 8080))
API_URL = os.getenv("API_URL", "http://localhost:5050")

# --- FRONTEND ---
BANNER_HIDE_MS = int(os.getenv("BANNER_HIDE_MS", 5000))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"
