# API endpoints
from . import auth, members, library, teachings, journal, prophecy, family, giving, live, messages, leads, courses, health

__all__ = ["auth", "members", "library", "teachings", "journal", "prophecy", "family", "giving", "live", "messages", "leads", "courses", "health"]
