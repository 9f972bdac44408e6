"""
Studio Manager - Source Package

Bookkeeping, appointment scheduling and a client roster for a
personal-care service provider.

DESIGN PRINCIPLES:
1. One in-memory state, saved in full after every change
2. Storage failures are logged, never block the user
3. Unknown ids are ignored, not errors
4. Completing an appointment books its income and credits its client
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Studio Manager Team"
