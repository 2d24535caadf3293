"""
Seed script to create the initial manager, HR and employee accounts.
Run this after running migrations.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.db.session import SessionLocal
from app.models.user import User, UserRole
from app.core.security import get_password_hash
from app.services.users import make_username

SEED_USERS = [
    {
        "employee_id": "MGR001",
        "first_name": "Morgan",
        "last_name": "Reyes",
        "email": "manager@company.com",
        "designation": "Engineering Manager",
        "department": "Management",
        "role": UserRole.MANAGER,
        "password": "manager123",
    },
    {
        "employee_id": "HR001",
        "first_name": "Harper",
        "last_name": "Quinn",
        "email": "hr@company.com",
        "designation": "HR Executive",
        "department": "Human Resources",
        "role": UserRole.HR,
        "password": "hr123456",
    },
    {
        "employee_id": "EMP001",
        "first_name": "John",
        "last_name": "Doe",
        "email": "employee@company.com",
        "designation": "Software Engineer",
        "department": "Engineering",
        "role": UserRole.EMPLOYEE,
        "password": "employee123",
    },
]


def seed_database():
    db = SessionLocal()

    try:
        for data in SEED_USERS:
            data = dict(data)
            password = data.pop("password")

            if db.query(User).filter(User.email == data["email"]).first():
                print(f"✓ {data['role'].value} user {data['email']} already exists")
                continue

            user = User(
                **data,
                username=make_username(data["first_name"], data["last_name"]),
                password_hash=get_password_hash(password),
            )
            db.add(user)
            print(f"✓ Created {data['role'].value} user (username: {user.username}, password: {password})")

        db.commit()
        print("\n✅ Database seeded successfully!")

    except Exception as e:
        print(f"❌ Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    print("🌱 Seeding database...")
    seed_database()
