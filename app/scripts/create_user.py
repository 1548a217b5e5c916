"""
Create an account from the command line (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD EMAIL [--role ROLE] [--tmdb-key KEY]
Example:
  python -m app.scripts.create_user admin your-secure-password admin@example.com --role ADMIN
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.database import SessionLocal
from app.core.logging_config import configure_logging
from app.crud.users import UserRepository
from app.models.user import UserRole
from app.schemas.auth import SignUpRequest
from app.services.auth import AuthService, AuthServiceError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument(
        "--role",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    parser.add_argument("--tmdb-key", default=None, help="Third-party movie database API key")
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        body = SignUpRequest(
            username=args.username.strip(),
            password=args.password,
            email=args.email.strip(),
            role=UserRole(args.role),
            tmdb_key=args.tmdb_key,
        )
    except ValidationError as e:
        print(f"Invalid input: {e.error_count()} error(s)", file=sys.stderr)
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"  {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        AuthService(UserRepository(db)).sign_up(body)
    except AuthServiceError as e:
        print(f"Could not create user '{body.username}': {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{body.username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
