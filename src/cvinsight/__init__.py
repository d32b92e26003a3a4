"""CVInsight resume builder."""

__version__ = "0.1.0"


def main() -> None:
    """Entry point for the application: start the API server."""
    from cvinsight.api.main import main as api_main

    api_main()
