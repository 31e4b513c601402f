"""Domain rule tables and verdict models."""
