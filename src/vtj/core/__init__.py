"""Core utilities shared across the job: exceptions and formatting."""
