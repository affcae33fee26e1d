"""Core enums and type definitions for Lucid Core."""

from enum import Enum


class TemporalDirection(str, Enum):
    """Which side of an anchor memory to look at within an episode."""
    BEFORE = "before"  # earlier events (anchor is the link target)
    AFTER = "after"    # later events (anchor is the link source)
    BOTH = "both"

    @classmethod
    def parse(cls, value: "str | TemporalDirection") -> "TemporalDirection":
        """Map a free-form direction string onto a direction.

        Accepts "before"/"backward" and "after"/"forward". Anything else,
        including unknown strings, means both directions.
        """
        if isinstance(value, cls):
            return value
        return _DIRECTION_ALIASES.get(str(value), cls.BOTH)


_DIRECTION_ALIASES: dict[str, TemporalDirection] = {
    "before": TemporalDirection.BEFORE,
    "backward": TemporalDirection.BEFORE,
    "after": TemporalDirection.AFTER,
    "forward": TemporalDirection.AFTER,
}
