"""Command-line interface for nmeacomm."""
