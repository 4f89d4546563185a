"""Configuration module for the IAUS scoring project.

Centralizes numeric defaults shared by the curve evaluator, the scoring
engine and the analysis helpers.
"""
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Example script output (created by the scripts that write to it)
OUTPUT_DIR = PROJECT_ROOT / "output"

# Considerations start at the middle of the input range
DEFAULT_INPUT_VALUE = 0.5

# Sampling
DEFAULT_CURVE_SAMPLES = 100  # intervals -> 101 points per curve preview
SWEEP_SAMPLES = 51
DECISION_MAP_GRID_SIZE = 20

# Sensitivity probes and classification thresholds
SENSITIVITY_LOW_PROBE = 0.1
SENSITIVITY_HIGH_PROBE = 0.9
SENSITIVITY_HIGH_THRESHOLD = 0.4
SENSITIVITY_MEDIUM_THRESHOLD = 0.2

# Logit input is kept inside [eps, 1 - eps]
LOGIT_EPSILON = 0.001

# Formula rendering
FORMULA_PRECISION = 4

# Default settings
DEFAULT_LOG_LEVEL = "INFO"
