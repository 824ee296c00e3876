# symbolic/constants.py
import math

# Named constants recognised by the parser. They shadow bindings of the same name.
CONSTANTS = {
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
}

FORWARD_TRIG = ("sin", "cos", "tan")
INVERSE_TRIG = ("asin", "acos", "atan")
# ln is the natural log, log is base 10
FUNCTIONS = FORWARD_TRIG + INVERSE_TRIG + ("ln", "log", "sqrt")

# Default sampling parameters for the 2D plot and the 3D surface.
DEFAULT_EXPRESSION = "x^2 - 4"
DEFAULT_DOMAIN_MIN = -10.0
DEFAULT_DOMAIN_MAX = 10.0
DEFAULT_STEPS = 200
MAX_STEPS = 1000

DEFAULT_SURFACE_EXPRESSION = "x^2 + y^2"
DEFAULT_SURFACE_MIN = -5.0
DEFAULT_SURFACE_MAX = 5.0
DEFAULT_SURFACE_STEPS = 30
MAX_SURFACE_STEPS = 200

# Roots closer than this to their predecessor are treated as the same root.
ROOT_TOLERANCE = 1e-6

DEFAULT_HISTOGRAM_BINS = 10
MIN_HISTOGRAM_BINS = 3
MAX_HISTOGRAM_BINS = 30

DEFAULT_NORMAL_MEAN = 0.0
DEFAULT_NORMAL_STD = 1.0
DEFAULT_NORMAL_SAMPLE_SIZE = 100

# Deepest expression tree accepted by the parser; also caps parenthesis/prefix nesting.
MAX_EXPRESSION_DEPTH = 100

# Compiled expressions kept in the cache before the least recently used is evicted.
EXPRESSION_CACHE_SIZE = 256
