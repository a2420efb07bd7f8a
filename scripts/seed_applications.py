"""
Seed a few demo loan applications into the configured SQL database.
Run: python -m scripts.seed_applications (from the project root).
"""
import asyncio
import os
import sys

# Add parent so we can import from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import engine
from services.registry import ApplicationRegistry
from stores import SqlApplicationStore


APPLICATIONS_DATA = [
    {
        "applicantName": "Alice Moreno",
        "email": "alice@example.com",
        "loanAmount": 5000,
        "loanPurpose": "car",
    },
    {
        "applicantName": "Bilal Haddad",
        "email": "bilal@example.com",
        "loanAmount": 25000,
        "loanPurpose": "home renovation",
    },
    {
        "applicantName": "Chen Wei",
        "email": "chen@example.com",
        "loanAmount": 12500.5,
        "loanPurpose": "tuition",
    },
]


async def seed():
    store = SqlApplicationStore(engine)
    await store.startup()
    registry = ApplicationRegistry(store)
    for data in APPLICATIONS_DATA:
        app = await registry.create(data)
        print(f"Seeded application {app.id} for {app.applicant_name}")
    await store.shutdown()
    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())
