from dotenv import load_dotenv
import os

load_dotenv()

LOG_LEVEL = os.getenv("REMIX_LOG_LEVEL", "INFO")

# Base & cache directories
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
CACHE_DIR = os.getenv("REMIX_CACHE_DIR", os.path.join(BASE_DIR, "cache"))
STORE_FILE = os.path.join(CACHE_DIR, "playlists.json")

# Playlist shape
MAX_PLAYLIST_SIZE = 30
MAX_SONGS_PER_ARTIST_PER_MEMBER = 3
AVAILABLE_MARKET = os.getenv("REMIX_MARKET", "US")

# Spotify API constants
SPOTIFY_API_BASE = "https://api.spotify.com/v1"
PAGE_LIMIT = 50
PLAYLIST_BATCH_SIZE = 100
TOP_TRACKS_TIME_RANGE = os.getenv("REMIX_TOP_TRACKS_TIME_RANGE", "short_term")
FETCH_MAX_WORKERS = int(os.getenv("REMIX_FETCH_MAX_WORKERS", "8"))

PLAYLIST_NAME = os.getenv("REMIX_PLAYLIST_NAME", "Remix")
PLAYLIST_DESCRIPTION = "Shared playlist built from every member's top and liked songs."

# Slack notifications (only one playlist is announced)
SLACK_API_URL = "https://slack.com/api/chat.postMessage"
SLACK_BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN")
NOTIFY_PLAYLIST_ID = os.getenv("REMIX_NOTIFY_PLAYLIST_ID")
NOTIFY_CHANNEL = os.getenv("REMIX_NOTIFY_CHANNEL", "#music")
