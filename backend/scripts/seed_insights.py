#!/usr/bin/env python3
"""
Seed demo insights for a local user

Creates the demo user (identity subject "demo_user") when missing and
replaces its stored insights with a small sample set, so the dashboard
panel has something to show without an upstream insight pipeline.
"""

import argparse
import asyncio

from spendwise.core.security import IdentityClaims
from spendwise.database import init_db, close_db, session_scope
from spendwise.repositories.insight import InsightRepository
from spendwise.services.users import UserService

DEMO_INSIGHTS = [
    {
        "category": "warning",
        "title": "Dining out is up 35%",
        "message": "You spent $412 on restaurants this month, compared with $305 last month.",
        "action_label": "How can I cut back?",
        "confidence": 0.86,
    },
    {
        "category": "tip",
        "title": "Save more",
        "message": "Moving a fixed amount to savings on payday makes saving automatic.",
        "action_label": "See how",
        "confidence": 0.74,
    },
    {
        "category": "success",
        "title": "Groceries on budget",
        "message": "Grocery spending stayed under your $450 budget for the third month in a row.",
        "confidence": 0.91,
    },
    {
        "category": "info",
        "title": "Three subscriptions renew next week",
        "message": "Streaming and cloud storage renewals total $38.97.",
        "action_label": "Should I keep them?",
    },
]


async def seed_insights(subject: str, email: str):
    await init_db()

    async with session_scope() as db:
        identity = IdentityClaims(
            subject=subject,
            first_name="Demo",
            last_name="User",
            email_addresses=[email],
        )
        user = await UserService(db).check_user(identity)
        print(f"✅ User: {user.name} (ID: {user.id})")

        rows = await InsightRepository().replace_for_user(db, user.id, DEMO_INSIGHTS)
        print(f"🎉 Stored {len(rows)} demo insights")
        for row in rows:
            print(f"   • [{row.category}] {row.title}")

    await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo insights")
    parser.add_argument("--subject", default="demo_user", help="Identity-provider subject")
    parser.add_argument("--email", default="demo@example.com")
    args = parser.parse_args()
    asyncio.run(seed_insights(args.subject, args.email))
