"""Core of the daily notes analyzer: data model, time axis, and analysis services."""
