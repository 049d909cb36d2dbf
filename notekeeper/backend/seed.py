"""
Sample Data.

A fixed set of notes for local development and demos. ``seed_notes``
replaces whatever notes exist with this set.

Usage:
    python cli.py --service seed
"""

from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.models.note import Note

logger = get_logger(__name__)

SAMPLE_NOTES: list[dict[str, Any]] = [
    {
        "title": "Welcome to Notes API",
        "content": (
            "This is your first note!\n"
            "Features you can explore:\n"
            "- Create and manage notes\n"
            "- Search through content\n"
            "- Organize with categories\n"
            "- Pin important items\n"
            "- Archive old content"
        ),
        "category": "welcome",
        "tags": ["getting-started", "api", "tutorial"],
        "is_pinned": True,
        "priority": "high",
    },
    {
        "title": "Project Meeting Notes",
        "content": (
            "Weekly project sync.\n"
            "Topics discussed:\n"
            "- Sprint planning for next week\n"
            "- API development progress\n"
            "- Database optimization strategies\n"
            "Action items:\n"
            "- Write comprehensive tests\n"
            "- Update API documentation\n"
            "Next meeting: Friday 2:00 PM"
        ),
        "category": "work",
        "tags": ["meeting", "planning", "project", "team"],
        "priority": "medium",
    },
    {
        "title": "Shopping List",
        "content": (
            "Weekly grocery shopping:\n"
            "Vegetables: tomatoes, lettuce, carrots, bell peppers\n"
            "Pantry: rice, pasta, olive oil, spices\n"
            "Dairy: milk, cheese, yogurt\n"
            "Don't forget to check expiration dates!"
        ),
        "category": "personal",
        "tags": ["shopping", "groceries", "weekly"],
        "priority": "low",
    },
    {
        "title": "App Feature Ideas",
        "content": (
            "Brainstorming session for new app features:\n"
            "- Dark mode toggle\n"
            "- Keyboard shortcuts\n"
            "- Rich text editor\n"
            "- Offline synchronization\n"
            "- Export to PDF\n"
            "- Calendar synchronization"
        ),
        "category": "creative",
        "tags": ["brainstorming", "features", "development", "ideas"],
        "priority": "medium",
    },
    {
        "title": "Learning Resources",
        "content": (
            "Curated list of learning resources for backend development:\n"
            "Books: Clean Code, Designing Data-Intensive Applications\n"
            "Documentation: FastAPI, SQLAlchemy, Pydantic\n"
            "Practice projects: todo API, blog platform, e-commerce backend"
        ),
        "category": "education",
        "tags": ["learning", "resources", "books", "courses"],
        "priority": "medium",
    },
    {
        "title": "Fitness Tracker",
        "content": (
            "This week's goals:\n"
            "- Run 3 times (5km each)\n"
            "- Gym sessions: 2 times\n"
            "- Yoga: 1 session\n"
            "Feeling stronger this week, improved running pace!"
        ),
        "category": "health",
        "tags": ["fitness", "goals", "tracking", "health"],
        "priority": "medium",
    },
    {
        "title": "Code Review Checklist",
        "content": (
            "Code quality:\n"
            "- [ ] Functions are small and focused\n"
            "- [ ] Error handling is implemented\n"
            "Security:\n"
            "- [ ] Input validation is present\n"
            "- [ ] No sensitive data in logs\n"
            "Testing:\n"
            "- [ ] Unit tests cover new functionality\n"
            "- [ ] Edge cases are tested"
        ),
        "category": "work",
        "tags": ["checklist", "code-review", "quality", "best-practices"],
        "priority": "high",
    },
    {
        "title": "Movie Watchlist",
        "content": (
            "Movies to watch this month:\n"
            "- The Matrix (1999)\n"
            "- Parasite (2019)\n"
            "- Arrival (2016)\n"
            "- Blade Runner 2049 (2017)"
        ),
        "category": "entertainment",
        "tags": ["movies", "watchlist", "entertainment", "recommendations"],
        "priority": "low",
    },
    {
        "title": "Archive Test Note",
        "content": (
            "This note demonstrates the archive functionality.\n"
            "Archived notes are hidden from the default view and from search,\n"
            "listed with archived=true, and restored by toggling archive again."
        ),
        "category": "test",
        "tags": ["archived", "test", "demonstration"],
        "is_archived": True,
        "priority": "low",
    },
]


async def seed_notes(session: AsyncSession) -> list[Note]:
    """
    Replace all notes with the sample set.

    The caller owns the transaction and must commit.

    Returns:
        The created notes
    """
    await session.execute(delete(Note))
    logger.info("Cleared existing notes")

    notes = [Note(**data) for data in SAMPLE_NOTES]
    session.add_all(notes)
    await session.flush()

    categories = sorted({note.category for note in notes})
    logger.info(
        "Sample notes created",
        extra={"count": len(notes), "categories": categories},
    )
    return notes
