"""Resilience – retry policies for backend calls."""
