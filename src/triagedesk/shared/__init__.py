"""
Shared Kernel Module
====================

This module contains shared infrastructure used across all bounded contexts
(Matching, Helpdesk and Analytics).

Architecture Pattern: Modular Monolith
- Each module (matching, helpdesk, analytics) is a bounded context
- Shared kernel contains only generic infrastructure

DO NOT add business logic from Helpdesk or Analytics to shared kernel.
"""
