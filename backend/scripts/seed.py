"""Database seed script — creates tables and stores a demo workflow.

Run: python -m scripts.seed
"""

import asyncio
import os
import sys

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DEMO_WORKFLOW_ID = "demo-ticket-triage"
DEMO_TEMPLATE_ID = "ticket-digest"

DEMO_STEPS = [
    {
        "id": "open_tickets",
        "name": "Keep open tickets",
        "type": "data_transformation",
        "config": {
            "transformation": "filter",
            "conditions": [{"field": "status", "value": "open"}],
            "replaceData": True,
        },
    },
    {
        "id": "by_team",
        "name": "Group by team",
        "type": "data_transformation",
        "config": {"transformation": "aggregate", "groupBy": "team"},
        "dependencies": ["open_tickets"],
    },
    {
        "id": "summary",
        "name": "Summarize backlog",
        "type": "ai_processing",
        "config": {
            "prompt": "Summarize these open support tickets for {team_lead}: {data}",
            "useCase": "ticket_summary",
        },
        "dependencies": ["open_tickets"],
        "timeout": 60,
    },
    {
        "id": "is_urgent",
        "name": "Escalation check",
        "type": "condition",
        "config": {
            "conditions": [{"field": "priority", "operator": "equals", "value": "high"}],
        },
    },
    {
        "id": "notify_lead",
        "name": "Email team lead",
        "type": "notification",
        "config": {
            "channel": "email",
            "template": DEMO_TEMPLATE_ID,
            "recipients": ["support-leads@example.com"],
        },
    },
]


async def seed():
    """Seed the database with a demo workflow and notification template."""
    from db.database import AsyncSessionLocal, init_db
    from services.workflow_store import SqlWorkflowStore

    # Initialize DB tables
    await init_db()

    store = SqlWorkflowStore(AsyncSessionLocal)

    await store.save_notification_template(
        DEMO_TEMPLATE_ID,
        subject="Ticket digest for {team_lead}",
        content="Open tickets: {data}",
        name="Ticket digest",
    )
    print(f"[seed] Notification template stored: {DEMO_TEMPLATE_ID}")

    await store.save_workflow(
        DEMO_WORKFLOW_ID,
        DEMO_STEPS,
        name="Ticket triage",
        description="Filter open tickets, group them, summarize and notify the team lead",
    )
    print(f"[seed] Workflow stored: {DEMO_WORKFLOW_ID} ({len(DEMO_STEPS)} steps)")

    # Parse back to catch schema drift in the demo definition
    definition = await store.get_workflow(DEMO_WORKFLOW_ID)
    print(f"[seed] Workflow validated: {[step.type for step in definition.steps]}")


if __name__ == "__main__":
    asyncio.run(seed())
