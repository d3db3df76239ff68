"""
Analysis thresholds, menus and the per-session analysis configuration.
"""

from dataclasses import dataclass
from typing import Optional


# Share of values that must parse as numbers for a column to count as numeric
NUMERIC_RATIO_THRESHOLD = 0.5

# Categorical vs text cutoff: max(CATEGORICAL_MIN_UNIQUE, round(ratio * rows))
CATEGORICAL_MIN_UNIQUE = 20
CATEGORICAL_UNIQUE_RATIO = 0.05

# Histogram bin width as a fraction of the value range
BIN_PERCENT_OPTIONS = [0.02, 0.05, 0.10, 0.20, 0.25]
DEFAULT_BIN_PERCENT = 0.10
MIN_BIN_WIDTH = 1e-9

# k-NN classification baseline
K_NEIGHBORS = 3
STD_FLOOR = 1e-9

HIGH_CORRELATION_THRESHOLD = 0.8

# Leave-one-out k-NN is O(n^2); the app refuses larger tables
MAX_BASELINE_ROWS = 5000

MAX_UPLOAD_BYTES = 200 * 1024 * 1024
CSV_ENCODINGS = ["utf-8-sig", "utf-8", "cp1252", "latin-1"]

LOG_LEVEL = "INFO"


# Baseline descriptions for UI
BASELINE_DESCRIPTIONS = {
    'regression': 'Mean Predictor (naive). Predicts the target mean for every row. Metrics: RMSE / MAE / R².',
    'classification': 'k-NN (k=3) on z-score scaled numeric features, evaluated with leave-one-out (LOO).',
    'no_target': 'No target selected. Pick a target column: categorical → classification, numeric → regression.',
    'no_usable_features': 'No numeric features available → cannot run baseline classifier.',
    'insufficient_data': 'Not enough valid rows to evaluate.'
}


@dataclass
class AnalysisConfig:
    """Choices made by the user for one analysis run."""
    target_column: Optional[str] = None
    histogram_column: Optional[str] = None
    bin_percent: float = DEFAULT_BIN_PERCENT
    k_neighbors: int = K_NEIGHBORS
