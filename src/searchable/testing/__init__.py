"""Testing support – fakes for asserting on compiled searches."""

from searchable.testing.fakes import RecordedCall, RecordingQueryBuilder

__all__ = ["RecordedCall", "RecordingQueryBuilder"]
