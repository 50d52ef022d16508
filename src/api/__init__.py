"""
FastAPI trend service.

Provides REST API for trend analysis and post drafting with:
- GET/POST /trends - Ranked hashtags and themes across platforms
- POST /generate-message - Platform-specific drafted posts
- GET /health - Service health check
"""

from src.api.app import create_app

__all__ = ["create_app"]
