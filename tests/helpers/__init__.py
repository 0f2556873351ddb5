from .refs import ReadOnlyRef, RecordingRef, marker

__all__ = [
    "ReadOnlyRef",
    "RecordingRef",
    "marker",
]
