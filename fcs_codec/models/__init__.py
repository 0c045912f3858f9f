from .segments import Data, Header, SegmentOffsets, Text
from .frames import FcsFile

__all__ = [
    "Data",
    "FcsFile",
    "Header",
    "SegmentOffsets",
    "Text",
]
