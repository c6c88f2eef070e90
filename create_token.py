"""Mint a bearer token for an administrator email.

Intended for local development and scripts; production deployments
hand out tokens from their identity provider.  The token is signed
with ``SECRET_KEY`` from the environment (or ``.env``)::

    python create_token.py admin@example.com --days 30
"""

import argparse

from volunteer_board_api.app.core.config import Settings
from volunteer_board_api.app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email", help="administrator email to embed in the token")
    parser.add_argument("--days", type=int, default=365, help="token lifetime in days")
    args = parser.parse_args()

    settings = Settings.from_env()
    token = create_access_token({"sub": args.email.lower()}, settings, expires_delta=args.days * 24 * 60 * 60)
    print(token)


if __name__ == "__main__":
    main()
