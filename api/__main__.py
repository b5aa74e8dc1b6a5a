"""
Serve the discussion board.

Run: python -m api --port 8000
"""
import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the discussion-board API.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--reset-db", action="store_true", help="Drop and recreate every table before serving")
    args = parser.parse_args()
    if args.reset_db:
        from api.config import reset_db
        reset_db()
    uvicorn.run("api.api:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
