"""
Helpdesk Module
===============

Categories, response templates and inquiries, with automated replies
chosen by the matching engine.

Clean Architecture layers:
- domain: Entities with lifecycle rules
- application: Services, DTOs and repository interfaces
- infrastructure: SQLAlchemy models, repositories and seed data
- interfaces: FastAPI controllers
"""
