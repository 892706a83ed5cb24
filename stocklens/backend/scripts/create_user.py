"""
Create the database tables and a dashboard user, then print a session token.

The token can be sent as the auth_token cookie or an Authorization: Bearer
header when calling /api/upload from a script.

Usage (from stocklens/backend):
  python scripts/create_user.py
  python scripts/create_user.py --email ops@example.com --username "Ops" --password s3cret!
"""
import argparse
import sys
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from app.database import SessionLocal, init_db
from app.models.user import User
from app.utils.auth_internal import create_access_token, hash_password, verify_password


def main():
    parser = argparse.ArgumentParser(description="Create (or reuse) a dashboard user and print an access token")
    parser.add_argument("--email", default="admin@stocklens.local")
    parser.add_argument("--username", default="Admin User")
    parser.add_argument("--password", default="123456")
    args = parser.parse_args()

    init_db()
    db = SessionLocal()
    try:
        email = args.email.strip().lower()
        user = db.query(User).filter(User.email == email).first()
        if user:
            matches = verify_password(args.password, user.password_hash)
            print(f"User already exists: {user.email} (id={user.id}, password {'matches' if matches else 'differs'})")
        else:
            user = User(email=email, username=args.username, password_hash=hash_password(args.password))
            db.add(user)
            db.commit()
            db.refresh(user)
            print(f"Created user: {user.email} / {args.password} (id={user.id})")
        print(f"auth_token={create_access_token(user.id, user.email)}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
