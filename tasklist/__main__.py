import argparse

import uvicorn

from tasklist.app.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the todo web service")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--reload", action="store_true", help="restart on code changes")
    args = parser.parse_args()

    uvicorn.run("tasklist.app.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
