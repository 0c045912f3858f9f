from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from fcs_codec.models.segments import Data, Text


def group_events(events: np.ndarray, parameter_count: int) -> Tuple[np.ndarray, int]:
    """Reshape the flat event sequence into rows of ``parameter_count`` values.

    Parameters
    ----------
    events:
        Flat 1D array as produced by the data decoder.
    parameter_count:
        Values per event ($PAR).

    Returns
    -------
    (matrix, dropped)
        ``matrix`` is ``(n_events, parameter_count)``; ``dropped`` is the number
        of trailing values that did not fill a complete event.
    """
    par = int(parameter_count)
    if par <= 0:
        raise ValueError(f"parameter_count must be > 0, got {par}")
    x = np.asarray(events)
    if x.ndim != 1:
        raise ValueError(f"Expected 1D array, got shape {x.shape}")
    n_events = x.size // par
    dropped = x.size - n_events * par
    if dropped:
        x = x[: n_events * par]
    return x.reshape((n_events, par)), dropped


def unique_column_names(names: Sequence[str]) -> List[str]:
    """Make parameter names usable as DataFrame columns (suffix repeats with _2, _3, ...)."""
    seen = {}
    out: List[str] = []
    for name in names:
        k = seen.get(name, 0) + 1
        seen[name] = k
        out.append(name if k == 1 else f"{name}_{k}")
    return out


def events_frame(text: Text, data: Data) -> pd.DataFrame:
    """Events as a DataFrame with one column per parameter ($PnN names)."""
    mat, _ = group_events(data.events, text.parameter_count)
    cols = unique_column_names(text.parameter_names())
    return pd.DataFrame(mat, columns=cols, copy=True)


def summarize_events(frame: pd.DataFrame) -> pd.DataFrame:
    """Per-parameter count/min/max/mean of the finite values, one row per column of ``frame``."""
    finite = frame.astype(np.float64).replace([np.inf, -np.inf], np.nan)
    summary = finite.agg(["count", "min", "max", "mean"]).T
    summary["count"] = summary["count"].astype(int)
    return summary
