"""Main entry point for scriptboard CLI when run as a module."""

from scriptboard.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
