"""Application layer – search compilation."""
