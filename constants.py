# constants.py
"""
Application-level constants.

These values are static and do not change between runs. Every rate below
is tuned per tick (one tick per display refresh), not per elapsed second.
Values that are part of the experimental configuration (seed, vase
capacity, flower ranges) live in config.json instead.
"""
import math

# Visualization settings
FPS = 60
DEFAULT_WINDOW_WIDTH = 1200
DEFAULT_WINDOW_HEIGHT = 800
WINDOW_TITLE = "Mono no Aware"

# --- Vase Geometry ---
VASE_WIDTH = 100
VASE_HEIGHT = 200
VASE_OPENING_WIDTH = 80
# Half-height of the rim and base ellipses. Flat for a graphic look.
VASE_PERSPECTIVE = 10
# Distance from the bottom edge of the viewport to the vase base.
VASE_BOTTOM_OFFSET = 80
# Depth of the catch band below the rim top.
VASE_HIT_BAND = 20
DEFAULT_VASE_CAPACITY = 5000
DEFAULT_FILL_AMOUNT = 30

# --- Rain ---
RAIN_GRAVITY = 0.02
RAIN_FADE_IN = 0.05
RAIN_SPAWN_Y = -20
RAIN_SPEED_RANGE = (3.0, 6.0)
RAIN_SIZE_RANGE = (14.0, 20.0)

# --- Particles ---
GRAVITY = 0.15
WATER_GRAVITY = GRAVITY * 0.5
PETAL_ACCELERATION = 0.005
PETAL_FLUTTER_AMPLITUDE = 0.5
# Radians per tick. Roughly 0.002 rad/ms at 60 FPS.
PETAL_FLUTTER_RATE = 0.033
# Petals spin 2.5x faster than they flutter.
PETAL_SPIN_RATIO = 2.5
PARTICLE_CULL_MARGIN = 50
SPLASH_COUNT = 2
SPLASH_SPEED_X = (-1.5, 1.5)
SPLASH_SPEED_Y = (-2.0, -1.0)
SPLASH_DECAY_RANGE = (0.0125, 0.0175)
SPLASH_SIZE_RANGE = (1.0, 3.0)
PETAL_JITTER = 15
PETAL_SPEED_X = (-1.0, 1.0)
PETAL_SPEED_Y = (0.5, 1.5)
PETAL_DECAY_RANGE = (0.003, 0.008)
PETAL_SIZE_RANGE = (2.0, 5.0)

# --- Flowers ---
BLOOM_RATE = 0.03
BLOOM_EPSILON = 0.5
SWAY_AMPLITUDE = 0.002
SWAY_RATE = 0.0167
WITHER_RATE = 0.001
PETAL_SHED_CHANCE = 0.05
# At or below this opacity a withered flower sheds every tick.
PETAL_SHED_THRESHOLD = 0.1
LILY_PETAL_COUNT = 6
PETAL_COUNT_RANGE = (5, 8)
FULL_TURN = 2 * math.pi
DEFAULT_FLOWER_RADIUS_RANGE = (20.0, 45.0)
DEFAULT_FLOWER_LIFE_RANGE = (600, 1200)

# --- Stems ---
DEFAULT_STEM_MIN_SPACING = 5.0
STEM_WIDTH_RANGE = (1.5, 3.0)
STEM_LENGTH_RANGE = (100.0, 300.0)
STEM_WIDTH_SCALE = 0.8

# --- Palette (RGB or RGBA, 0-255) ---
# Overcast pale blue-grey by day, deep indigo by night.
SKY_DAY = ((199, 205, 217), (232, 236, 242))
SKY_NIGHT = ((15, 16, 22), (30, 27, 48))
SUN_COLOR = (255, 255, 255, 153)
SUN_RADIUS = 60
SUN_OFFSET = (120, 100)  # From the top-right corner.
MOON_COLOR = (238, 242, 255, 255)
MOON_RADIUS = 30
MOON_POSITION = (120, 120)
# Ratio of the halo size to the body radius.
CELESTIAL_HALO_RATIO = 2.2
CELESTIAL_HALO_ALPHA = 60

VASE_BACK_DAY = (200, 210, 220, 51)
VASE_BACK_NIGHT = (20, 20, 30, 102)
VASE_EDGE_DAY = (255, 255, 255, 102)
VASE_EDGE_NIGHT = (100, 100, 120, 51)
WATER_BODY_DAY = (170, 190, 210, 128)
WATER_BODY_NIGHT = (20, 30, 50, 153)
WATER_SURFACE_DAY = (200, 220, 240, 102)
WATER_SURFACE_NIGHT = (40, 50, 80, 102)
WATER_SURFACE_EDGE = (255, 255, 255, 51)
RIM_HIGHLIGHT = (255, 255, 255, 77)
REFLECTION = (255, 255, 255, 26)
# Diagonal glass sheen: (offset, alpha) stops.
GLASS_SHEEN_STOPS = ((0.0, 0), (0.3, 5), (0.5, 0), (0.7, 13), (1.0, 0))

STEM_DAY = (87, 102, 88)
STEM_NIGHT = (47, 62, 48)

RAIN_DAY = (100, 120, 140)
RAIN_NIGHT = (200, 210, 255)
RAIN_ALPHA = 0.6 * 0.8

SPLASH_DAY = (120, 140, 160, 128)
SPLASH_NIGHT = (160, 180, 220, 128)
PARTICLE_ALPHA = 0.8

FLOWER_CENTER_DAY = (255, 250, 220, 204)
FLOWER_CENTER_NIGHT = (255, 255, 200, 204)

SILL_HEIGHT = 50
SILL_TOP_DEPTH = 15
SILL_TOP_DAY = (212, 205, 197)
SILL_TOP_NIGHT = (38, 32, 27)
SILL_FRONT_DAY = (197, 190, 182)
SILL_FRONT_NIGHT = (26, 22, 18)
VASE_SHADOW = (0, 0, 0, 51)
FRAME_DAY = (255, 255, 255)
FRAME_NIGHT = (15, 16, 22)
FRAME_WIDTH = 8
FRAME_INNER_INSET = 15
FRAME_INNER = (0, 0, 0, 26)

# Weighted hue bands for flower colours: (cumulative probability, hue range).
FLOWER_HUE_BANDS = (
    (0.4, (330.0, 360.0)),  # Pinks
    (0.6, (0.0, 30.0)),     # Faded reds / peaches
    (0.9, (200.0, 270.0)),  # Blues / purples
    (1.0, (40.0, 60.0)),    # Pale yellows
)
FLOWER_SATURATION_DAY = (30.0, 60.0)
FLOWER_SATURATION_NIGHT = (40.0, 60.0)
FLOWER_LIGHTNESS_DAY = (70.0, 90.0)
FLOWER_LIGHTNESS_NIGHT = (60.0, 75.0)

# --- UI Chrome ---
UI_MARGIN = 24
UI_BACKGROUND_ALPHA = 100
TOGGLE_BUTTON_SIZE = 48
