"""
Job Application Tracker - Main Entry Point

Usage:
    # Start the HTTP API
    python main.py api

    # Run a CLI command
    python main.py cli list
    python main.py cli insights

    # Quick insight report
    python main.py insights
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))


def main():
    if len(sys.argv) < 2:
        print_help()
        return

    command = sys.argv[1].lower()

    if command == "api":
        # Start the FastAPI server
        import uvicorn
        from job_tracker.ui.api.config import get_settings

        settings = get_settings()
        uvicorn.run(
            "job_tracker.ui.api.main:app",
            host=settings.host,
            port=settings.port,
            reload=settings.debug,
            log_level=settings.log_level,
        )

    elif command == "cli":
        from job_tracker.ui.cli import app
        sys.argv = sys.argv[1:]  # Remove 'cli' from args
        if len(sys.argv) == 1:
            sys.argv.append("--help")
        app()

    elif command == "insights":
        from job_tracker.ui.cli import app
        sys.argv = [sys.argv[0], "insights"]
        app()

    elif command in ["help", "-h", "--help"]:
        print_help()

    else:
        print(f"Unknown command: {command}")
        print_help()


def print_help():
    print("""
Job Application Tracker
=======================

Commands:
    api             Start the HTTP API
    cli <command>   Run a CLI command (list, add, status, delete, insights,
                    sources, resumes, response-times, weekly-summary, serve)
    insights        Print the comprehensive insight report
    help            Show this help message

Examples:
    python main.py api
    python main.py cli add "Acme Corp" "Backend Engineer" --source LinkedIn
    python main.py cli status 1 Interview
    python main.py insights

For CLI subcommands, run:
    python -m job_tracker.ui.cli --help
""")


if __name__ == "__main__":
    main()
