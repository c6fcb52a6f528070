"""SQLAlchemy ORM 모델 패키지.

Only ICS-212 forms are stored in the database; defects and inspection
logs are issues on the tracker.
"""

from app.models.vehicle_inspection import VehicleInspectionForm

__all__ = ["VehicleInspectionForm"]
