"""
Administrative commands for the storefront services.

Neither service exposes user registration over HTTP, so users of the auth
service are seeded from here.

Usage:
    storefront-admin create-tables --service catalog
    storefront-admin create-user --username jdoe --email jdoe@example.com --password secret
    storefront-admin delete-user <user id>
"""
import argparse
import sys

from storefront.config import AuthSettings, CatalogSettings
from storefront.database import create_db_engine, create_session_factory, init_db
from storefront.errors import UserAlreadyExistError
from storefront.models.product import Product
from storefront.models.user import User
from storefront.repositories.user_repository import SQLUserRepository
from storefront.schemas.user import UserCreate
from storefront.utils.security import build_password_context


def _user_repository(settings: AuthSettings) -> SQLUserRepository:
    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine, [User.__table__])
    return SQLUserRepository(
        create_session_factory(engine),
        build_password_context(settings.PASSWORD_HASH_ROUNDS),
    )


def create_tables(args) -> int:
    if args.service == "catalog":
        settings, table = CatalogSettings(), Product.__table__
    else:
        settings, table = AuthSettings(), User.__table__

    init_db(create_db_engine(settings.DATABASE_URL), [table])
    print(f"Created {table.name} table for {settings.SERVICE_NAME}")
    return 0


def create_user(args) -> int:
    repository = _user_repository(AuthSettings())
    user_data = UserCreate(
        username=args.username,
        email=args.email,
        password=args.password,
        nickname=args.nickname or args.username,
        phone=args.phone,
        email_verified=args.verified,
    )
    try:
        user = repository.create(user_data)
    except UserAlreadyExistError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Created user {user.id} ({user.email})")
    return 0


def delete_user(args) -> int:
    repository = _user_repository(AuthSettings())
    repository.delete(args.user_id)
    print(f"Deleted user {args.user_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront services administration.")
    sub = parser.add_subparsers(dest="command", required=True)

    t = sub.add_parser("create-tables", help="create the tables a service owns")
    t.add_argument("--service", choices=["catalog", "auth"], required=True)
    t.set_defaults(func=create_tables)

    c = sub.add_parser("create-user", help="create an auth service user")
    c.add_argument("--username", required=True)
    c.add_argument("--email", required=True)
    c.add_argument("--password", required=True)
    c.add_argument("--nickname")
    c.add_argument("--phone")
    c.add_argument("--verified", action="store_true", help="mark the email as verified")
    c.set_defaults(func=create_user)

    d = sub.add_parser("delete-user", help="delete an auth service user")
    d.add_argument("user_id")
    d.set_defaults(func=delete_user)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
