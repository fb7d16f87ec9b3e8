"""aistack command-line interface."""
