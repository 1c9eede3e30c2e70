from dotenv import load_dotenv
import os

# Load environment variables from a .env file
load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Branding used in share messages and links
APP_NAME = os.getenv("APP_NAME", "StepLeague")
CHALLENGES_URL = os.getenv("CHALLENGES_URL", "/challenges")
SHARE_HASHTAGS = [
    tag.strip()
    for tag in os.getenv("CHALLENGE_SHARE_HASHTAGS", "StepLeague,StepChallenge").split(",")
    if tag.strip()
]

# Challenge limits
MAX_FUTURE_START_DAYS = int(os.getenv("CHALLENGE_MAX_FUTURE_START_DAYS", 90))
MAX_CHALLENGE_DURATION_DAYS = int(os.getenv("CHALLENGE_MAX_DURATION_DAYS", 90))
MIN_CHALLENGE_DURATION_DAYS = int(os.getenv("CHALLENGE_MIN_DURATION_DAYS", 1))
MAX_MESSAGE_LENGTH = int(os.getenv("CHALLENGE_MAX_MESSAGE_LENGTH", 500))
