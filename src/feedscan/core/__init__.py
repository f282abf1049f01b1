"""Record model, exceptions and logging setup shared by every feedscan module."""
