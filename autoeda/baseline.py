"""
Baseline model evaluation for a chosen target column.

Numeric targets get a mean-predictor regression baseline. Other targets get
a k-nearest-neighbour classifier on z-score scaled numeric features,
evaluated with leave-one-out. The result is always exactly one of the
variants below; bad data never raises.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np
from sklearn.metrics import confusion_matrix, precision_recall_fscore_support

from config.analysis_configs import K_NEIGHBORS, STD_FLOOR
from autoeda.utils import is_missing, is_mostly_numeric, parse_numbers, to_float

logger = logging.getLogger(__name__)


class BaselineStatus(Enum):
    NO_TARGET = "no_target"
    REGRESSION = "regression"
    CLASSIFICATION = "classification"
    NO_USABLE_FEATURES = "no_usable_features"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class NoTarget:
    """No target selected, or the target is not in the header."""
    target: Optional[str] = None
    status: BaselineStatus = field(default=BaselineStatus.NO_TARGET, init=False)


@dataclass(frozen=True)
class RegressionBaseline:
    """Mean predictor scored on the rows it was fitted on."""
    target: str
    target_mean: float
    mae: float
    rmse: float
    r2: float
    rows_used: int
    status: BaselineStatus = field(default=BaselineStatus.REGRESSION, init=False)


@dataclass(frozen=True)
class ClassShare:
    label: str
    count: int
    ratio: float


@dataclass(frozen=True)
class ClassificationBaseline:
    """
    Leave-one-out k-NN results.

    confusion_matrix rows are actual classes, columns predicted classes,
    both in the order of classes.
    """
    target: str
    classes: Tuple[str, ...]
    confusion_matrix: Tuple[Tuple[int, ...], ...]
    accuracy: float
    macro_f1: float
    rows_used: int
    feature_count: int
    feature_names: Tuple[str, ...]
    precision: Tuple[float, ...]
    recall: Tuple[float, ...]
    f1: Tuple[float, ...]
    class_distribution: Tuple[ClassShare, ...]
    k_neighbors: int = K_NEIGHBORS
    status: BaselineStatus = field(default=BaselineStatus.CLASSIFICATION, init=False)


@dataclass(frozen=True)
class NoUsableFeatures:
    """Categorical target but no mostly-numeric feature column."""
    target: str
    status: BaselineStatus = field(default=BaselineStatus.NO_USABLE_FEATURES, init=False)


@dataclass(frozen=True)
class InsufficientData:
    """Too few usable rows to evaluate."""
    target: str
    rows_used: int
    status: BaselineStatus = field(default=BaselineStatus.INSUFFICIENT_DATA, init=False)


BASELINE_RESULT_TYPES = (
    NoTarget, RegressionBaseline, ClassificationBaseline, NoUsableFeatures, InsufficientData
)


# ============================================================================
# Regression
# ============================================================================


def evaluate_regression(target, y):
    """
    Score the mean predictor on y.

    The prediction is the mean itself, so the residual sum of squares equals
    the total sum of squares and R² is 0.0.
    """
    y = np.asarray(y, dtype=float)
    y_mean = float(np.mean(y))
    errors = y - y_mean

    mae = float(np.mean(np.abs(errors)))
    rmse = float(np.sqrt(np.mean(errors ** 2)))
    sst = float(np.sum(errors ** 2))
    sse = sst
    r2 = 1.0 - (sse / sst) if sst > 0 else 0.0

    return RegressionBaseline(
        target=target,
        target_mean=y_mean,
        mae=mae,
        rmse=rmse,
        r2=r2,
        rows_used=len(y)
    )


# ============================================================================
# Classification
# ============================================================================


def select_feature_columns(table, target_index):
    """Indices of all non-target columns whose non-missing values are mostly numeric."""
    features = []
    for column in table.columns():
        if column.index == target_index:
            continue
        if is_mostly_numeric(column.non_missing()):
            features.append(column.index)
    return features


def build_design_matrix(table, target_index, feature_indices):
    """
    Feature vectors and labels for rows with a label and every feature numeric.

    Rows failing either condition are dropped, not imputed.
    """
    X = []
    y = []
    for row in table.rows:
        label = table.cell(row, target_index).strip()
        if not label:
            continue
        feats = [to_float(table.cell(row, idx)) for idx in feature_indices]
        if any(v is None for v in feats):
            continue
        X.append(feats)
        y.append(label)
    return np.array(X, dtype=float).reshape(len(X), len(feature_indices)), y


def z_score_scale(X, std_floor=STD_FLOOR):
    """Scale each column to zero mean and unit sample standard deviation."""
    X = np.asarray(X, dtype=float)
    if len(X) == 0:
        return X
    means = X.mean(axis=0)
    ddof = 1 if len(X) > 1 else 0
    stds = np.maximum(X.std(axis=0, ddof=ddof), std_floor)
    return (X - means) / stds


def majority_label(neighbor_labels):
    """
    Most frequent label among neighbours given nearest first.

    Ties go to the tied label seen first, i.e. the one with the nearest
    member.
    """
    counts = Counter(neighbor_labels)
    return max(counts, key=counts.get)


def knn_leave_one_out(X, y, k=K_NEIGHBORS):
    """
    Predict every row from all the others with k-nearest neighbours.

    Distances are squared Euclidean, computed one row at a time so memory
    stays linear in the row count. Rows at equal distance are taken in row
    order.

    Returns:
        List of predicted labels, aligned with y
    """
    X = np.asarray(X, dtype=float)
    n = len(X)
    k = min(k, n - 1)

    predictions = []
    others = np.arange(n)
    for i in range(n):
        distances = np.sum((X - X[i]) ** 2, axis=1)
        candidates = np.delete(others, i)
        order = np.argsort(distances[candidates], kind="stable")[:k]
        neighbor_labels = [y[j] for j in candidates[order]]
        predictions.append(majority_label(neighbor_labels))
    return predictions


def classification_metrics(y_true, y_pred, classes):
    """
    Confusion matrix and scores for labelled predictions.

    Precision, recall and F1 are 0.0 wherever their denominator is zero.

    Returns:
        Tuple of (confusion, accuracy, precision, recall, f1, macro_f1)
    """
    conf = confusion_matrix(y_true, y_pred, labels=list(classes))
    precision, recall, f1, _ = precision_recall_fscore_support(
        y_true, y_pred, labels=list(classes), average=None, zero_division=0
    )
    n = len(y_true)
    accuracy = float(np.trace(conf)) / n if n else 0.0
    macro_f1 = float(np.mean(f1)) if len(classes) else 0.0
    return conf, accuracy, precision, recall, f1, macro_f1


def class_distribution(y, classes):
    total = max(len(y), 1)
    counts = Counter(y)
    return tuple(ClassShare(c, counts[c], counts[c] / total) for c in classes)


def evaluate_classification(table, target, target_index, k_neighbors=K_NEIGHBORS):
    feature_indices = select_feature_columns(table, target_index)
    if not feature_indices:
        logger.info("No numeric features for target %s", target)
        return NoUsableFeatures(target)

    X_raw, y = build_design_matrix(table, target_index, feature_indices)
    n = len(y)
    if n < 2:
        logger.info("Only %d usable rows for target %s", n, target)
        return InsufficientData(target, n)

    X = z_score_scale(X_raw)
    classes = sorted(set(y))
    y_pred = knn_leave_one_out(X, y, k_neighbors)
    conf, accuracy, precision, recall, f1, macro_f1 = classification_metrics(y, y_pred, classes)

    logger.info(
        "k-NN baseline for %s: %d rows, %d features, accuracy %.3f",
        target, n, len(feature_indices), accuracy
    )
    return ClassificationBaseline(
        target=target,
        classes=tuple(classes),
        confusion_matrix=tuple(tuple(int(v) for v in row) for row in conf),
        accuracy=accuracy,
        macro_f1=macro_f1,
        rows_used=n,
        feature_count=len(feature_indices),
        feature_names=tuple(table.header[i] for i in feature_indices),
        precision=tuple(float(v) for v in precision),
        recall=tuple(float(v) for v in recall),
        f1=tuple(float(v) for v in f1),
        class_distribution=class_distribution(y, classes),
        k_neighbors=k_neighbors
    )


# ============================================================================
# Entry point
# ============================================================================


def evaluate_baseline(table, target_column=None, k_neighbors=K_NEIGHBORS):
    """
    Run the baseline that fits the target column.

    Args:
        table: Parsed Table
        target_column: Name of the target; None or unknown gives NoTarget
        k_neighbors: Neighbours for the classification baseline

    Returns:
        One of NoTarget, RegressionBaseline, ClassificationBaseline,
        NoUsableFeatures, InsufficientData
    """
    if k_neighbors < 1:
        raise ValueError(f"k_neighbors must be at least 1, got {k_neighbors}")

    if not target_column or not table.has_column(target_column):
        return NoTarget(target_column)

    target_index = table.column_index(target_column)
    raw_values = [
        v.strip() for v in table.column_at(target_index).values if not is_missing(v)
    ]
    if not raw_values:
        logger.info("Target %s has no values", target_column)
        return InsufficientData(target_column, 0)

    if is_mostly_numeric(raw_values):
        logger.info("Target %s is numeric: mean-predictor regression baseline", target_column)
        return evaluate_regression(target_column, parse_numbers(raw_values))

    logger.info("Target %s is categorical: k-NN classification baseline", target_column)
    return evaluate_classification(table, target_column, target_index, k_neighbors)
