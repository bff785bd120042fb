# src/campus_market/scripts/issue_token.py
"""Create a profile if needed and print a bearer token for it.

Intended for local development, where no external auth provider issues tokens.
"""
from __future__ import annotations

import argparse
import sys

from campus_market.core.security import create_access_token
from campus_market.db.session import SessionLocal
from campus_market.models import Profile, Role


def ensure_profile(profile_id: str, role: Role, full_name: str | None, email: str | None) -> Profile:
    """Return the profile with ``profile_id``, creating it with ``role`` if missing."""
    with SessionLocal() as db:
        profile = db.get(Profile, profile_id)
        if profile is None:
            profile = Profile(id=profile_id, role=role.value, full_name=full_name, email=email)
            db.add(profile)
            db.commit()
            print(f"[issue_token] created {role.value} profile {profile_id}", file=sys.stderr)
        return profile


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Issue a development bearer token")
    parser.add_argument("profile_id", help="Profile id to use as the token subject")
    parser.add_argument("--admin", action="store_true", help="Create the profile as an admin")
    parser.add_argument("--name", default=None, help="Full name for a newly created profile")
    parser.add_argument("--email", default=None, help="Email for a newly created profile")
    parser.add_argument(
        "--no-create",
        action="store_true",
        help="Only mint the token; do not touch the database",
    )
    args = parser.parse_args(argv)

    if not args.no_create:
        role = Role.ADMIN if args.admin else Role.USER
        ensure_profile(args.profile_id, role, args.name, args.email)
    print(create_access_token(args.profile_id))


if __name__ == "__main__":
    main()
