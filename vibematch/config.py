from dotenv import load_dotenv
import os

load_dotenv()

# Base & data directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.getenv("VIBEMATCH_DATA_DIR", os.path.join(BASE_DIR, "data"))

# Document store file (users, playlists, swipes, matches, messages, presence)
STORE_FILE = os.getenv("VIBEMATCH_STORE_FILE", os.path.join(DATA_DIR, "store.json"))

# Logging
LOG_LEVEL = os.getenv("VIBEMATCH_LOG_LEVEL", "INFO")

# Spotify API constants
SPOTIFY_API_BASE = os.getenv("SPOTIFY_API_BASE", "https://api.spotify.com/v1")
SPOTIFY_REQUEST_TIMEOUT = float(os.getenv("SPOTIFY_REQUEST_TIMEOUT", "10"))
SPOTIFY_PLAYLIST_LIMIT = 50
SPOTIFY_PLAYLIST_TRACKS_PAGE = 50
SPOTIFY_TRACKS_PER_PLAYLIST = 20

# Presence: minimum seconds between "online" writes, typing flag lifetime
PRESENCE_MIN_INTERVAL_SECONDS = float(
    os.getenv("VIBEMATCH_PRESENCE_MIN_INTERVAL", "5")
)
TYPING_TTL_SECONDS = float(os.getenv("VIBEMATCH_TYPING_TTL", "3"))

# Swipe deck
SWIPE_CANDIDATES_LIMIT = 10

# Collections in the document store
USERS_COLLECTION = "users"
PLAYLISTS_COLLECTION = "playlists"
SWIPES_COLLECTION = "swipes"
MATCHES_COLLECTION = "matches"
MESSAGES_COLLECTION = "messages"
PRESENCE_COLLECTION = "presence"
