"""labstuff command-line interface."""
