#!/usr/bin/env python3
"""
Issue an access token for a user of the QR Codes API.

The token is signed with ``SECRET_KEY`` from the environment, so run
this with the same environment as the API server.

Usage:
    python create_token.py --user-id 7f3c9a52 --days 365
"""

import argparse
import sys

from qr_codes_api.app.core.security import create_access_token


def main(argv=None):
    ap = argparse.ArgumentParser(description="Print a bearer token for the QR Codes API.")
    ap.add_argument("--user-id", required=True, help="Identifier of the user the token is issued for")
    ap.add_argument("--days", type=int, default=None, help="Token lifetime in days (default: ACCESS_TOKEN_EXPIRE_MINUTES)")
    args = ap.parse_args(argv)

    if not args.user_id.strip():
        print("[!] Empty user id is not allowed.", file=sys.stderr)
        return 1
    if args.days is not None and args.days <= 0:
        print("[!] --days must be positive.", file=sys.stderr)
        return 1

    expires = args.days * 24 * 60 * 60 if args.days else None
    print(create_access_token(args.user_id.strip(), expires_delta=expires))
    return 0


if __name__ == "__main__":
    sys.exit(main())
