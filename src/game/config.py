import os
from pathlib import Path

# --- Display ---
WIDTH = 480
HEIGHT = 720
FPS = 60
WINDOW_TITLE = "Flappy Sky"

# --- Bird (units are px and ticks, one tick per frame) ---
BIRD_X_DIVISOR = 6          # bird x = width / 6
BIRD_RADIUS = 20
GRAVITY = 0.5               # added to velocity every tick
LIFT = -8.0                 # velocity set on flap (negative = up)

# --- Pipes ---
PIPE_WIDTH = 60
PIPE_SPAWN_EVERY = 90       # frames
PIPE_GAP_BASE = 150
PIPE_GAP_SHRINK = 10        # gap lost per level
PIPE_GAP_MIN = 90
PIPE_SPEED_BASE = 3         # speed = base + level
LEVEL_UP_EVERY = 10         # level++ whenever score hits a multiple of this

# --- Clouds ---
CLOUD_SPAWN_EVERY = 150     # frames
CLOUD_Y_FRACTION = 1 / 3    # clouds live in the top third
CLOUD_RADIUS_MIN = 40
CLOUD_RADIUS_SPREAD = 30
CLOUD_SPEED_MIN = 1.0
CLOUD_SPEED_SPREAD = 1.0

# --- End-of-run UI timings (ms) ---
REVEAL_DELAY_MS = 800       # overlay alone, then summary + restart button appear
FADE_TRIGGER_MS = 50        # un-hide -> fade-in start
FADE_DURATION_MS = 400

# --- Persistence ---
DATA_DIR = Path(os.environ.get("FLAPPY_SKY_HOME", Path.home() / ".flappy_sky"))
BEST_SCORE_FILE = DATA_DIR / "scores.json"
BEST_SCORE_KEY = "bestScore"

# --- Colors (RGB / RGBA) ---
COLOR_SKY = (112, 197, 230)
COLOR_FG = (255, 255, 255)
COLOR_PIPE = (46, 204, 113)
COLOR_CLOUD = (255, 255, 255, 204)
COLOR_BIRD = (255, 255, 0)
COLOR_EYE = (255, 255, 255)
COLOR_PUPIL = (0, 0, 0)
COLOR_BEAK = (255, 165, 0)
COLOR_OVERLAY = (0, 0, 0, 128)
COLOR_PANEL = (20, 30, 48)
COLOR_PANEL_EDGE = (90, 130, 180)
COLOR_BUTTON = (40, 60, 90)
