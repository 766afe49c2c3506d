"""Desktop simulator for BALLRUNNER."""
