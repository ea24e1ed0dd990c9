# --- Display ---
WIDTH = 800
HEIGHT = 400
FPS = 60

# --- World / Physics (per-frame units) ---
GROUND_Y = HEIGHT * 0.9     # floor line (px)
GRAVITY = 0.8               # added to vy every frame
JUMP_VELOCITY = -15.0       # upward impulse (px/frame)

# --- Player ---
DINO_X = 60                 # player's fixed centre x (world scrolls left)
DINO_SIZE = 40
DINO_STAND_H = DINO_SIZE * 0.9
DINO_CROUCH_H = DINO_SIZE * 0.5
LEG_ANIM_FRAMES = 5         # legs swap once the timer exceeds this

# --- Obstacles ---
SPAWN_INTERVAL_INITIAL = 90
SPAWN_INTERVAL_MIN = 90     # [min, max) frames between spawns
SPAWN_INTERVAL_MAX = 130
GROUND_BLOCK_CHANCE = 0.7
BLOCK_MIN_H, BLOCK_MAX_H = 30, 60
BLOCK_MIN_W, BLOCK_MAX_W = 20, 40
FLYER_W, FLYER_H = 35, 20
FLYER_MIN_LIFT, FLYER_MAX_LIFT = 20, 50   # extra clearance above dino height

# --- Difficulty ---
INITIAL_SCROLL_SPEED = 5.0
SCROLL_ACCELERATION = 0.001  # per frame, no cap

# --- Glitch ---
GLITCH_DURATION_FRAMES = 4
GLITCH_INTERVAL_MIN = 120
GLITCH_INTERVAL_MAX = 300

# --- Background (renderer only) ---
NUM_STARS = 100
STAR_SPEED_FACTOR = 0.2
NUM_GRID_LINES = 20
GRID_LINE_SPEED_FACTOR = 0.5
GRID_LINE_SPACING = 50
NUM_VERTICAL_GRID_LINES = 30
HORIZON_Y_FACTOR = 0.5

# --- Observation normalisation ---
MAX_VY = 20.0
MAX_OBS_SPEED = 20.0
OBS_NEAREST = 2              # obstacles described per observation

SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (26, 0, 43)
COLOR_FG = (255, 255, 255)
COLOR_DINO = (0, 255, 221)
COLOR_EYE = (255, 0, 85)
COLOR_OBSTACLE = (255, 0, 85)
COLOR_GRID = (142, 0, 209)
COLOR_NEON = (0, 255, 221)
