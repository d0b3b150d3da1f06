"""
Application Infrastructure
==========================

Technical services shared by the bounded contexts (database engine and sessions).
"""
