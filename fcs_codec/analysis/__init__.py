"""Analysis package - turning the flat event sequence into per-event rows.

The data decoder only produces a flat float32 sequence. Grouping into events
of $PAR parameters, naming the columns from $PnN and summarizing them happen
here, on top of the decoded segments.
"""

from .events import events_frame, group_events, summarize_events, unique_column_names

__all__ = [
    "events_frame",
    "group_events",
    "summarize_events",
    "unique_column_names",
]
