"""Configuration and setup for the music video script agent"""

import os
import json
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Orchestration network configuration
NVM_API_KEY = os.getenv('NVM_API_KEY', '')
AGENT_DID = os.getenv('AGENT_DID', '')
ORCHESTRATION_API_URL = os.getenv('ORCHESTRATION_API_URL', 'http://localhost:3100')
ORCHESTRATION_REQUEST_TIMEOUT = 30.0  # seconds
STEP_CREATED_STATUS = 201

# Event subscription (Redis pub/sub)
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
EVENT_CHANNEL_PREFIX = "events"
SUBSCRIBE_EVENT_TYPES = ["step-updated"]

# Dummy mode swaps the LLM content generator for canned data
IS_DUMMY = os.getenv('IS_DUMMY', 'false').lower() == 'true'

# Gemini configuration
GEMINI_API_KEY = os.getenv('GEMINI_API_KEY', '')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')
PROJECT_ID = os.getenv('GCP_PROJECT_ID')
LOCATION = os.getenv('GOOGLE_CLOUD_REGION', 'us-central1')

# Per-call timeout for content generation, unset means wait indefinitely
_content_timeout = os.getenv('CONTENT_TIMEOUT', '').strip()
CONTENT_TIMEOUT = float(_content_timeout) if _content_timeout else None

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# Video production configuration
SCENE_DURATIONS = (5, 10)  # seconds, the clip lengths the video generators accept
DURATION_TOLERANCE = 5  # accepted overshoot over the target song length
DEFAULT_VIDEO_DURATION = 180  # seconds

# Workflow variants: ordered steps created by the init step
WORKFLOW_VARIANT = os.getenv('WORKFLOW_VARIANT', 'music_video')
WORKFLOW_VARIANTS = {
    "music_video": {
        "label": "Music video from song metadata",
        "steps": [
            "generateScript",
            "extractScenes",
            "generateSettings",
            "extractCharacters",
            "transformScenes",
        ],
        "requires_song_brief": True,
        "rebalance_durations": True,
    },
    "story": {
        "label": "Short film from a free-text idea",
        "steps": [
            "generateScript",
            "extractScenes",
            "extractSettings",
            "extractCharacters",
            "transformCharacters",
            "transformScenes",
        ],
        "requires_song_brief": False,
        "rebalance_durations": False,
    },
}


def load_service_account_credentials():
    """Load Vertex AI service account credentials from the credentials_dict env var"""
    credentials_json = os.getenv('credentials_dict')
    if not credentials_json:
        raise ValueError("Gemini credentials not configured. Set GEMINI_API_KEY or credentials_dict in environment")

    from google.oauth2 import service_account

    credentials_info = json.loads(credentials_json)
    return service_account.Credentials.from_service_account_info(
        credentials_info,
        scopes=['https://www.googleapis.com/auth/cloud-platform']
    )
