from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from fcs_codec.models.segments import Data, Header, Text


@dataclass(frozen=True)
class FcsFile:
    """
    In-memory representation of one FCS dataset after the three segments
    have been decoded.

    Notes
    - ``data.events`` is the flat sequence; grouping by $PAR happens in events().
    - ``warnings`` collects non-fatal findings from reading (clipped segments,
      dropped bytes, offset disagreements).
    """
    source_path: Optional[Path]
    header: Header
    text: Text
    data: Data
    warnings: Tuple[str, ...] = ()

    @property
    def parameter_count(self) -> int:
        return self.text.parameter_count

    @property
    def n_events(self) -> int:
        return int(len(self.data) // self.parameter_count)

    def events(self) -> np.ndarray:
        """Events as a ``(n_events, $PAR)`` float32 matrix."""
        # Avoid circular import at module level
        from fcs_codec.analysis.events import group_events

        mat, _ = group_events(self.data.events, self.parameter_count)
        return mat

    def to_dataframe(self) -> pd.DataFrame:
        from fcs_codec.analysis.events import events_frame

        return events_frame(self.text, self.data)
