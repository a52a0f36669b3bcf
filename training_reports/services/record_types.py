"""Display names of personal record types."""

RECORD_TYPE_NAMES = {
    "max_distance": "Longest distance",
    "max_avg_speed": "Best average speed",
    "max_speed": "Top speed",
    "max_trimp": "Highest TRIMP",
    "max_elevation": "Most elevation gain",
    "longest_duration": "Longest duration",
    "max_avg_heart_rate": "Highest average heart rate",
    "max_calories": "Most calories",
}


class RecordTypeFormatter:
    """Turn record type codes into human-readable names."""

    def __init__(self, names: dict = None):
        self.names = dict(RECORD_TYPE_NAMES if names is None else names)

    def format_record_type_name(self, record_type: str) -> str:
        """Display name for ``record_type``; unknown codes are returned as-is."""
        return self.names.get(record_type, record_type)
