#!/usr/bin/env python3
"""
Print a signed JWT for local API testing.

Usage: python generate_test_token.py [user_id] [days]
"""

import sys

from api.v1.utils.jwt_utils import sign_jwt
from shared.config import get_config


def main():
    jwt_secret = get_config().auth.jwt_secret
    if not jwt_secret:
        print("Error: no auth.jwt_secret in config.json and no JWT_SECRET set")
        sys.exit(1)

    user_id = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    days = int(sys.argv[2]) if len(sys.argv) > 2 else 7

    token = sign_jwt({"userId": user_id}, jwt_secret, days * 24 * 60 * 60)

    port = get_config().api.port
    print("=" * 60)
    print(f"Test token for user {user_id} (valid {days} days)")
    print("=" * 60)
    print(f"\nToken: {token}")
    print("\ncurl example:")
    print(f'   curl -H "Authorization: Bearer {token}" http://127.0.0.1:{port}/api/reviews/anime/<animeId>/mine')
    print("=" * 60)


if __name__ == "__main__":
    main()
