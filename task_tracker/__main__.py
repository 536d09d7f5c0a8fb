"""Entry point for `python -m task_tracker`."""

from task_tracker.cli import app


def main() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
