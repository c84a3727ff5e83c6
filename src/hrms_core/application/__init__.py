"""Application layer – cache, scheduling and pagination building blocks."""
