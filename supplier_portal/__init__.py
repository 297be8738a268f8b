"""
Supplier portal API: role checks and user profiles on top of Firebase.
"""

__version__ = "1.0.0"
