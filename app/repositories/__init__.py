"""레포지토리 패키지 — 데이터 접근 계층.

Repository package — Data access layer.
``issue_tracker`` wraps the GitHub issues API (defects and inspection
logs); the SQL repositories extend BaseRepository for ICS-212 forms.
"""
