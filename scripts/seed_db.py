# Seed MongoDB with an admin account and sample employees (with login accounts)
# WARNING: wipes the users / employees / leaves / counters collections first
# Usage: set env MONGODB_URI and MONGODB_DB_NAME, then run
# Example: python scripts/seed_db.py

import os
from datetime import datetime

import bcrypt
from pymongo import MongoClient

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://mongodb:27017")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "office")
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

ADMIN = {"email": "admin@company.com", "password": "admin123"}
EMPLOYEE_PASSWORD = "employee123"

EMPLOYEES = [
    {
        "name": "Sarah Johnson",
        "email": "sarah.johnson@company.com",
        "phone": "555-123-4567",
        "address": "123 Main St, Anytown, CA 12345",
        "department": "Engineering",
        "position": "Senior Developer",
        "joinDate": "2021-05-12",
        "status": "Active",
        "salary": "$95,000",
        "manager": "David Miller",
        "emergencyContact": {"name": "John Johnson", "phone": "555-987-6543"},
        "skills": ["JavaScript", "React", "Node.js", "TypeScript"],
        "projects": ["Website Redesign", "Mobile App Development"],
        "performance": "Excellent",
        "leaveBalance": {"annual": 14, "sick": 8, "personal": 5},
    },
    {
        "name": "Michael Chen",
        "email": "michael.chen@company.com",
        "phone": "555-234-5678",
        "address": "456 Oak St, Somewhere, NY 54321",
        "department": "Marketing",
        "position": "Marketing Manager",
        "joinDate": "2020-11-03",
        "status": "Active",
        "salary": "$85,000",
        "manager": "Jennifer Lopez",
        "emergencyContact": {"name": "Lisa Chen", "phone": "555-876-5432"},
        "skills": ["Digital Marketing", "SEO", "Content Strategy", "Analytics"],
        "projects": ["Q2 Marketing Campaign", "Brand Refresh"],
        "performance": "Good",
        "leaveBalance": {"annual": 12, "sick": 7, "personal": 4},
    },
    {
        "name": "Emily Rodriguez",
        "email": "emily.rodriguez@company.com",
        "phone": "555-345-6789",
        "address": "789 Pine St, Elsewhere, TX 67890",
        "department": "Human Resources",
        "position": "HR Specialist",
        "joinDate": "2022-02-15",
        "status": "On Leave",
        "salary": "$70,000",
        "manager": "Robert Wilson",
        "emergencyContact": {"name": "Carlos Rodriguez", "phone": "555-765-4321"},
        "skills": ["Recruiting", "Employee Relations", "Onboarding"],
        "projects": ["Hiring Process Revamp"],
        "performance": "Good",
        "leaveBalance": {"annual": 20, "sick": 10, "personal": 5},
    },
]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


client = MongoClient(MONGODB_URI)
db = client[MONGODB_DB_NAME]

for name in ("users", "employees", "leaves", "counters"):
    db[name].delete_many({})

now = datetime.utcnow()

db["users"].insert_one({
    "email": ADMIN["email"],
    "password": hash_password(ADMIN["password"]),
    "role": "admin",
    "employeeId": None,
    "createdAt": now,
    "updatedAt": now,
})

for seq, employee in enumerate(EMPLOYEES, start=1):
    doc = {**employee, "employeeId": f"EMP{seq:03d}", "createdAt": now, "updatedAt": now}
    result = db["employees"].insert_one(doc)
    db["users"].insert_one({
        "email": employee["email"],
        "password": hash_password(EMPLOYEE_PASSWORD),
        "role": "employee",
        "employeeId": result.inserted_id,
        "createdAt": now,
        "updatedAt": now,
    })

db["counters"].update_one(
    {"_id": "employee_id"},
    {"$set": {"seq": len(EMPLOYEES)}},
    upsert=True,
)

print(f"Seeded admin ({ADMIN['email']}) and {len(EMPLOYEES)} employees")
