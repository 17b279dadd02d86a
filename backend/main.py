"""
Zap Manager — WhatsApp instance management API.

Run with: uvicorn main:app --host 0.0.0.0 --port 3000
"""

from core.app import create_app

app = create_app()
