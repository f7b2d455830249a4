# Initialize MongoDB counters for employee_id to current max EMP number
# Usage: set env MONGODB_URI and MONGODB_DB_NAME, then run from a machine with access
# Example: python scripts/init_mongo_counters.py

import os
import re

from pymongo import MongoClient

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://mongodb:27017")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "office")

EMPLOYEE_ID_PATTERN = re.compile(r"^EMP(\d+)$")

client = MongoClient(MONGODB_URI)
db = client[MONGODB_DB_NAME]

employees = db["employees"]
counters = db["counters"]

# employeeId는 문자열이라 정렬로 최댓값을 못 구한다 (EMP1000 < EMP999)
max_id = 0
for doc in employees.find({}, {"employeeId": 1}):
    match = EMPLOYEE_ID_PATTERN.match(doc.get("employeeId", ""))
    if match:
        max_id = max(max_id, int(match.group(1)))

counters.update_one({"_id": "employee_id"}, {"$set": {"seq": max_id}}, upsert=True)

print(f"Initialized counters.employee_id.seq to {max_id}")
