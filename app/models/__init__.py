"""
Database models package.
"""

from app.models.job import Job
from app.models.bid import Bid

__all__ = ["Job", "Bid"]
