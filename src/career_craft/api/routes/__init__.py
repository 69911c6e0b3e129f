"""Route handlers for the API."""

from career_craft.api.routes import resumes

__all__ = ["resumes"]
