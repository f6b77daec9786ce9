"""cafeatures command-line interface."""
