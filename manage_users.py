"""
User maintenance from the command line

    python manage_users.py list
    python manage_users.py create-admin --email boss@example.com --password secret123
    python manage_users.py deactivate --email someone@example.com
"""
import argparse
import getpass
import sys

from stocktrack.core import Base, SessionLocal, engine
from stocktrack.core.exceptions import InvalidInputError
from stocktrack.core.logging_config import setup_logging
from stocktrack.services import UserService
import stocktrack.models  # noqa: F401  register tables


def list_users(db):
    print("\n--- Users ---")
    users = UserService.get_users(db)
    if not users:
        print("No users found.")
        return
    for u in users:
        state = "active" if u.is_active else "inactive"
        print(f"[{u.role}] {u.username} <{u.email}> {state}")


def create_admin(db, email, username, password):
    user = UserService.ensure_super_admin(db, email, username, password)
    if user:
        print(f"CREATED_SUPER_ADMIN: {user.id}")
    else:
        print(f"A user with email {email} already exists.")


def deactivate(db, email):
    user = UserService.get_by_email(db, email)
    if not user:
        print(f"Error: user '{email}' not found.")
        return 1
    was_super_admin = UserService.is_active_super_admin(user)
    user.is_active = False
    try:
        UserService.check_super_admin_kept(db, user, was_super_admin)
    except InvalidInputError as e:
        print(f"Error: {e.message}")
        return 1
    db.commit()
    print(f"Deactivated {user.email}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage StockTrack users")
    parser.add_argument('action', choices=['list', 'create-admin', 'deactivate'], help='Action to perform')
    parser.add_argument('--email', '-e', help='User email')
    parser.add_argument('--username', '-u', default='superadmin', help='Username for create-admin')
    parser.add_argument('--password', '-p', help='Password for create-admin (prompted when omitted)')
    
    args = parser.parse_args()
    setup_logging()
    Base.metadata.create_all(bind=engine)
    
    db = SessionLocal()
    status = 0
    try:
        if args.action == 'list':
            list_users(db)
        elif not args.email:
            print(f"Error: --email required for {args.action}")
            status = 2
        elif args.action == 'create-admin':
            password = args.password or getpass.getpass("Password: ")
            create_admin(db, args.email, args.username, password)
        elif args.action == 'deactivate':
            status = deactivate(db, args.email)
    finally:
        db.close()
    
    sys.exit(status)
