"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services talk to the issue tracker through the ``IssueTracker`` protocol
and to the database through repositories, and normalize tracker errors
into HTTP errors before they reach the routers.
"""
