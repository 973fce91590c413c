# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60
GROUND_OFFSET = 90          # ground line sits this far above the bottom edge

# --- World / Physics (per tick, one tick per frame) ---
BASE_SPEED = 10.0           # scroll speed on every fresh run (never ramps)
SCROLL_FACTOR = 0.7         # obstacles move speed * SCROLL_FACTOR px per tick
SCORE_FACTOR = 0.08         # score gained per tick = speed * SCORE_FACTOR

# --- Player ---
PLAYER_X = 130              # player's fixed x (world scrolls left)
PLAYER_W = 50
PLAYER_H = 50
GRAVITY = 1.3
JUMP_VELOCITY = -19.0
SPIN_PER_TICK = 0.3         # cosmetic rotation while airborne (radians)

# --- Obstacle generation ---
HOLE_WIDTH = 170
SPIKE_SIZE = 28
SPIKE_CHANCE = 0.4          # per spawn, otherwise a pit
SPIKE_CLEARANCE = 180       # runway after a spike: clearance + uniform(pad)
SPIKE_PAD_MIN = 80
SPIKE_PAD_MAX = 140
FIRST_SPAWN_AHEAD = 500     # frontier on reset = width + this
SPAWN_BUFFER = 250          # keep the last pit at least width + this ahead
INITIAL_OBSTACLES = 2

# --- Difficulty (land gap after a pit) ---
LAND_GAP_MIN = 220
LAND_GAP_MAX = 520
LAND_GAP_BASE_SPEED = 14
LAND_GAP_SPEED_CAP = 60
LAND_GAP_MAX_SHRINK = 3.0   # per speed unit above base
LAND_GAP_MIN_SHRINK = 1.2
LAND_GAP_FLOOR = 160
LAND_GAP_MIN_SPREAD = 120
SHORT_GAP_CHANCE = 0.18
SHORT_GAP_MIN = 160
SHORT_GAP_MAX = 230

# --- Culling / terminal ---
PIT_PRUNE_MARGIN = 200
SPIKE_PRUNE_MARGIN = 100
FALL_MARGIN = 60            # game over once y > HEIGHT + FALL_MARGIN
SEED_DEFAULT = 12345

# --- Scenery ---
BUILDING_COUNT = 20
BUILDING_SPACING = 90
BUILDING_LOOP_PAD = 700
PARALLAX_FACTOR = 0.06

# --- Colors (RGB) ---
COLOR_SKY = (143, 211, 255)
COLOR_SUN = (255, 213, 79)
COLOR_BUILDING = (159, 176, 195)
COLOR_WINDOW = (188, 200, 213)    # white at 30% over COLOR_BUILDING
COLOR_GROUND = (68, 68, 68)
COLOR_SPIKE = (211, 47, 47)
COLOR_PLAYER = (76, 175, 80)
COLOR_FACE = (0, 0, 0)
COLOR_FG = (20, 24, 32)
COLOR_PANEL = (10, 20, 35, 170)
COLOR_PANEL_TEXT = (220, 235, 255)

# --- Input ---
JUMP_KEYS = ("w", "W", "space", "up")
PAUSE_KEYS = ("p", "P")
