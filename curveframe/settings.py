# curveframe global settings
import sys

# Arc-length table resolution used when no division count is given
ARC_LENGTH_DIVISIONS = 200

# Parameter offset for finite-difference tangents
TANGENT_DELTA = 0.001

# Rotation axes shorter than this leave the previous normal unchanged
ROTATION_AXIS_EPSILON = sys.float_info.epsilon

# Sampled tangents shorter than this are treated as undefined
DEGENERATE_TANGENT_EPSILON = 1e-12

# Relative tolerance for "target hits a table entry exactly"
ARC_LENGTH_RTOL = 1e-6
