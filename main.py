"""Main entry point for learnmate CLI."""

from learnmate.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
