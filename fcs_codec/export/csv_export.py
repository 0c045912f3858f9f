from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd


def write_events_csv(frame: pd.DataFrame, file_path: Union[str, Path], *, header: bool = False) -> Path:
    """
    Write one line per event, values comma separated.

    Without ``header`` the file holds numbers only, one event per line.
    """
    path = Path(file_path).expanduser().resolve()
    frame.to_csv(path, sep=",", header=header, index=False, lineterminator="\n")
    return path
