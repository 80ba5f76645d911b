"""Game domain packages."""
