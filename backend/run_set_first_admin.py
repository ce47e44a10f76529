#!/usr/bin/env python3
"""
Grant the admin role to the first user of a fresh deployment.

Promoting users through the API needs an admin caller, so the very first
admin has to be set with the service-role key instead. After that, use
PUT /api/admin/users/{uid}/role.

Usage:
    uv run python run_set_first_admin.py <user-uid>

The user has to sign out and back in before the new role shows up in
their token.
"""

import argparse
import sys

from rich.console import Console
from supabase import AuthError, Client

from shared.database import get_supabase_client
from shared.models import UserRole

console = Console()


def set_first_admin(client: Client, uid: str) -> None:
    """Write role=admin into the user's app_metadata claims."""
    client.auth.admin.update_user_by_id(uid, {"app_metadata": {"role": UserRole.ADMIN.value}})


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Set the first admin user")
    parser.add_argument("uid", help="Supabase Auth user id to promote")
    args = parser.parse_args(argv)

    uid = args.uid.strip()
    if not uid:
        console.print("[red]Error:[/red] A user id is required.")
        return 1

    try:
        client = get_supabase_client()
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    try:
        set_first_admin(client, uid)
    except AuthError as e:
        console.print(f"[red]Error setting admin:[/red] {e}")
        return 1

    console.print(f"[green]✓[/green] User {uid} is now an admin")
    console.print("The user will need to sign out and sign back in for the change to take effect.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
