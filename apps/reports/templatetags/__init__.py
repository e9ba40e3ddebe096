"""Template tags package for reports app."""
