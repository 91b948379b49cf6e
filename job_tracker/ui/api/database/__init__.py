"""Database module for application tracking"""

from .application_database import ApplicationDatabase, get_application_database

__all__ = ["ApplicationDatabase", "get_application_database"]
