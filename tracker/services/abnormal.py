"""
tracker/services/abnormal.py

Whole-reading abnormal flag, computed once when a reading is created.
Uses ABNORMAL_FLAG_BOUNDS, which is configured separately from the alert table.
"""

from typing import Mapping

from tracker.constants import ABNORMAL_FLAG_BOUNDS, Metric
from tracker.services.thresholds import usable_value


def is_abnormal(metrics: Mapping[Metric | str, object]) -> bool:
    """Return True if any present metric falls outside its flag bounds."""
    for name, raw in metrics.items():
        try:
            metric = Metric(name)
        except ValueError:
            continue
        bounds = ABNORMAL_FLAG_BOUNDS.get(metric)
        value = usable_value(raw)
        if bounds is None or value is None:
            continue
        if bounds.low is not None and value < bounds.low:
            return True
        if bounds.high is not None and value > bounds.high:
            return True
    return False
