"""Central scene defaults so the whole render pipeline stays in sync."""

# Tree geometry
TREE_TOP_MARGIN = 3      # rows kept clear above the sky stars
TREE_HEIGHT = 22         # canopy rows
TREE_BASE_WIDTH = 30     # half-width of the widest canopy row
BASE_BOTTOM_MARGIN = 4   # rows between the tree base and the bottom edge

# Orbiting star
VERTICAL_SPEED = 0.5
ROTATE_SPEED = 3.0
HUE_RATE = 20.0          # degrees per clock unit
ASPECT_STRETCH = 2.0     # terminal cells are about twice as tall as wide
STAR_TIME_STEP = 0.06    # clock advance per tick
LIGHT_RADIUS = 8.0

# Trail particles
PARTICLE_INITIAL_LIFE = 1.2
PARTICLE_LIFE_DECAY = 0.05
PARTICLE_FRONT_EXTRA = 1

# Sky
SKY_STAR_COUNT = 8
SKY_GLOW_RADIUS = 2
SKY_GLOW_DAMPENING = 0.6
SKY_BASE = (6, 10, 40)
SKY_TWINKLE_SPEED = 1.2

# Rows painted with sky below the tree base every frame
FILL_DEPTH = 4

# 25 FPS
FRAME_INTERVAL = 0.04
