"""Print a Supabase access token for calling the API during development."""

import argparse
import sys
from collections.abc import Sequence

from supabase import create_client

from tutor_sessions.config import Settings


def fetch_access_token(settings: Settings, email: str, password: str) -> str:
    """Sign in with email and password and return the session access token."""
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    response = client.auth.sign_in_with_password(
        {"email": email, "password": password}
    )
    if response.session is None:
        raise RuntimeError(f"Sign-in for {email} returned no session")
    return response.session.access_token


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``tutor-sessions-token`` script."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", default="dummy@example.com")
    parser.add_argument("--password", default="testing12")
    args = parser.parse_args(argv)

    token = fetch_access_token(Settings(), args.email, args.password)
    sys.stdout.write(f"ID TOKEN:\n{token}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
