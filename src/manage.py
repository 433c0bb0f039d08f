"""
src/manage.py
=============
Administration commands for the EMS device monitor.

Administrators and their station grants are provisioned here; the HTTP API
only reads them.

Usage:
    python -m src.manage init-db
    python -m src.manage create-admin admin77 --password 's3cret'
    python -m src.manage set-password admin77            # prompts
    python -m src.manage grant admin77 77 S1
    python -m src.manage revoke admin77 77 S1
"""

from dotenv import load_dotenv
load_dotenv()

import argparse
import getpass
import sys
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from src.DB.database import create_all_tables
from src.DB.session import SessionLocal
from src.Repositories import administrator as admin_repo
from src.Repositories import station as station_repo
from src.Repositories import station_grant as grant_repo
from src.Services.passwords import hash_password


def _read_password(args) -> str:
    if args.password:
        return args.password
    first = getpass.getpass("Password: ")
    second = getpass.getpass("Repeat password: ")
    if first != second:
        raise SystemExit("[CLI] ❌ Passwords do not match")
    return first


def cmd_init_db(args) -> int:
    create_all_tables()
    return 0


def cmd_create_admin(args) -> int:
    password = _read_password(args)
    if not password:
        print("[CLI] ❌ Password must not be empty")
        return 1

    with SessionLocal() as db:
        try:
            admin_repo.create_admin(db, args.login, hash_password(password))
        except IntegrityError:
            print(f"[CLI] ❌ Administrator '{args.login}' already exists")
            return 1

    print(f"[CLI] ✅ Created administrator '{args.login}'")
    return 0


def cmd_set_password(args) -> int:
    password = _read_password(args)
    if not password:
        print("[CLI] ❌ Password must not be empty")
        return 1

    with SessionLocal() as db:
        if not admin_repo.set_password_hash(db, args.login, hash_password(password)):
            print(f"[CLI] ❌ Unknown administrator '{args.login}'")
            return 1

    print(f"[CLI] ✅ Password updated for '{args.login}'")
    return 0


def cmd_grant(args) -> int:
    with SessionLocal() as db:
        if admin_repo.get_admin_by_login(db, args.login) is None:
            print(f"[CLI] ❌ Unknown administrator '{args.login}'")
            return 1

        _, created = station_repo.ensure_station(db, args.region_code, args.smp_code)
        if created:
            print(f"[CLI] Created station {args.region_code}/{args.smp_code}")

        if grant_repo.add_grant(db, args.login, args.region_code, args.smp_code):
            print(f"[CLI] ✅ Granted {args.region_code}/{args.smp_code} to '{args.login}'")
        else:
            print(f"[CLI] ⚠️  '{args.login}' already holds {args.region_code}/{args.smp_code}")
    return 0


def cmd_revoke(args) -> int:
    with SessionLocal() as db:
        if grant_repo.remove_grant(db, args.login, args.region_code, args.smp_code):
            print(f"[CLI] ✅ Revoked {args.region_code}/{args.smp_code} from '{args.login}'")
            return 0
    print(f"[CLI] ⚠️  No such grant: '{args.login}' {args.region_code}/{args.smp_code}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.manage",
        description="EMS device monitor administration",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    init_db = commands.add_parser("init-db", help="Create missing tables")
    init_db.set_defaults(handler=cmd_init_db)

    create_admin = commands.add_parser("create-admin", help="Create an administrator")
    create_admin.add_argument("login", help="Administrator login, e.g. admin77")
    create_admin.add_argument("--password", help="Password (prompted when omitted)")
    create_admin.set_defaults(handler=cmd_create_admin)

    set_password = commands.add_parser("set-password", help="Replace an administrator's password")
    set_password.add_argument("login")
    set_password.add_argument("--password", help="Password (prompted when omitted)")
    set_password.set_defaults(handler=cmd_set_password)

    for name, handler, text in (
        ("grant", cmd_grant, "Grant a station to an administrator (creates the station if needed)"),
        ("revoke", cmd_revoke, "Revoke a station grant"),
    ):
        sub = commands.add_parser(name, help=text)
        sub.add_argument("login")
        sub.add_argument("region_code")
        sub.add_argument("smp_code")
        sub.set_defaults(handler=handler)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
