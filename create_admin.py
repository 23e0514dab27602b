"""Create a back-office admin account: python create_admin.py <name> <email> <password>"""
import sys

from coworks.db.session import SessionLocal
from coworks.core.security import hash_password
from coworks.models.admin import Admin


def main(name: str, email: str, password: str):
    db = SessionLocal()
    try:
        if db.query(Admin).filter(Admin.email == email).first():
            print("Admin account already exists!")
            return

        db.add(Admin(name=name, email=email, password_hash=hash_password(password)))
        db.commit()
        print("Admin account created successfully!")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 4:
        sys.exit(__doc__)
    main(*sys.argv[1:])
