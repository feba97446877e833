"""Testing fakes – in-memory doubles for the search ports."""
from searchable.testing.fakes.query_builder import RecordedCall, RecordingQueryBuilder

__all__ = ["RecordedCall", "RecordingQueryBuilder"]
