"""Print a bearer token for a user id (local development helper).

Usage:
    python create_token.py 42 --days 30
"""
import argparse

from project_hub_api.app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id", type=int)
    parser.add_argument("--days", type=int, default=365)
    args = parser.parse_args()
    print(create_access_token({"sub": str(args.user_id)}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
