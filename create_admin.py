#!/usr/bin/env python3
"""
Create an administrator in the Geed MongoDB database, or promote and
reset the password of an existing account.

The in-memory store is seeded with its own admin on every start, so
this script only applies to a MongoDB deployment.

Usage:
    python create_admin.py --uri mongodb://localhost:27017 --email admin@geed.com --name "Site Admin"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import sys

from geed_api.app.core.config import settings
from geed_api.app.core.db import connect_mongo
from geed_api.app.stores.mongo_store import MongoStore


async def upsert_admin(store: MongoStore, email: str, name: str, password: str) -> str:
    existing = await store.find_user_by_email(email)
    if existing:
        await store.update_user(existing["id"], {"role": "admin", "is_active": True, "password": password})
        return f"[+] Promoted existing user {email} to admin and reset the password"
    user = await store.create_user({"name": name, "email": email, "password": password, "role": "admin"})
    return f"[+] Created admin {email} with id {user['id']}"


def main() -> None:
    ap = argparse.ArgumentParser(description="Create or promote a Geed administrator (MongoDB).")
    ap.add_argument("--uri", default=settings.mongodb_uri, help="MongoDB connection string (default: MONGODB_URI)")
    ap.add_argument("--db", default=settings.mongodb_db, help="Database name (default: MONGODB_DB)")
    ap.add_argument("--email", required=True, help="Administrator e-mail")
    ap.add_argument("--name", default="Admin User", help="Display name for a new account")
    ap.add_argument("--password", help="Password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    db = connect_mongo(args.uri, args.db)
    if db is None:
        print(f"[!] MongoDB is not reachable at {args.uri or '<unset>'}", file=sys.stderr)
        sys.exit(1)

    password = args.password or getpass.getpass("Enter admin password: ")
    if len(password) < 6:
        print("[!] Password must be at least 6 characters.", file=sys.stderr)
        sys.exit(1)

    print(asyncio.run(upsert_admin(MongoStore(db), args.email.lower(), args.name, password)))


if __name__ == "__main__":
    main()
