"""
Triage Desk
===========

Support inquiry triage service: logs inquiries, auto-responds with canned
templates chosen by a keyword matching engine, and reports automation metrics.
"""

__version__ = "1.0.0"
