import argparse

import uvicorn

from taskflow.app.core.logging_config import configure_logging


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run the TaskFlow web app")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--log-level", default=None, help="Overrides APP_LOG_LEVEL")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    uvicorn.run(
        "taskflow.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=(args.log_level or "info").lower(),
    )


if __name__ == "__main__":
    main()
