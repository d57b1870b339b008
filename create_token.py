"""Print a long-lived access token for a user id (e.g. for scripts or integrations).

The token only identifies the user.  Permissions come from the stored
account on every request, so promote the user first if the token must
reach admin endpoints.
"""

import argparse

from geed_api.app.core.security import create_access_token

ap = argparse.ArgumentParser(description="Issue an access token for a Geed user.")
ap.add_argument("user_id", help="ID of the user the token authenticates as")
ap.add_argument("--days", type=int, default=365, help="Token lifetime in days")
args = ap.parse_args()

print(create_access_token({"sub": args.user_id}, expires_delta=args.days * 24 * 60 * 60))
