"""
Serverless entry point for the Triage Desk API
"""
import sys
import os

# Add src directory to path
src_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Set environment variables for serverless
os.environ.setdefault("ENVIRONMENT", "production")
os.environ.setdefault("MATCHING_RULES_PATH", "/tmp/matching_rules.yaml")
os.environ.setdefault("ANALYTICS_SNAPSHOT_INTERVAL", "0")  # No background jobs in serverless

from mangum import Mangum
from triagedesk.main import app

# Lambda handler for ASGI app; lifespan runs startup (database, rules) per cold start
handler = Mangum(app, lifespan="auto")
