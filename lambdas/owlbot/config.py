import os

# Global configuration and feature flags
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
FEATURE_S3_DATA = os.getenv("FEATURE_S3_DATA", "false").lower() == "true"
FEATURE_STRICT_SIGNATURE = os.getenv("FEATURE_STRICT_SIGNATURE", "false").lower() == "true"
# Background delivery threads; long-running processes only, never inside Lambda
FEATURE_THREADED_DELIVERY = os.getenv("FEATURE_THREADED_DELIVERY", "false").lower() == "true"
FOLLOWUP_DELAY_MS = int(os.getenv("FOLLOWUP_DELAY_MS", "1500"))
SEND_TIMEOUT_SECONDS = float(os.getenv("SEND_TIMEOUT_SECONDS", "10"))

# Messenger platform
MESSENGER_APP_SECRET = os.getenv("MESSENGER_APP_SECRET", "")
MESSENGER_VALIDATION_TOKEN = os.getenv("MESSENGER_VALIDATION_TOKEN", "")
MESSENGER_PAGE_ACCESS_TOKEN = os.getenv("MESSENGER_PAGE_ACCESS_TOKEN", "")
GRAPH_API_URL = os.getenv("GRAPH_API_URL", "https://graph.facebook.com/v2.6/me/messages")
SERVER_URL = os.getenv("SERVER_URL", "").rstrip("/")
FEEDBACK_URL = os.getenv("FEEDBACK_URL", "")

# Resource names
S3_BUCKET_DATA = os.getenv("S3_BUCKET_DATA", "")
S3_BUILDINGS_KEY = os.getenv("S3_BUILDINGS_KEY", "data/buildings.json")
S3_BUSINESSES_KEY = os.getenv("S3_BUSINESSES_KEY", "data/businesses.json")
S3_FACTS_KEY = os.getenv("S3_FACTS_KEY", "data/facts.json")
S3_EXPLORE_KEY = os.getenv("S3_EXPLORE_KEY", "data/explore.json")
SENDER_FUNCTION_NAME = os.getenv("SENDER_FUNCTION_NAME")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
