"""Matchcast - sports match tracking and live commentary backend."""
