"""
UTH Advisor Server - FastAPI Server Layer
"""

from uthadvisor.server.app import create_app

__all__ = ["create_app"]
