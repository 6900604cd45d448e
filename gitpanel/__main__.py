"""Entry point for running GitPanel as a module."""

from gitpanel.cli import app


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
