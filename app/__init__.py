"""Registration Desk — public registration form and admin dashboard."""

__version__ = "1.0.0"
