"""
Notebox Backend - Personal Notes Service

REST backend for a personal note-taking app: cookie-based sessions and
per-user note ownership.
"""

__version__ = "1.0.0"
