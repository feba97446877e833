"""Adapters – record-store implementations of the search QueryBuilder port."""
