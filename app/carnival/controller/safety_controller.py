import logging
from typing import Optional

from sqlalchemy.orm import Session

from carnival.database import utcnow
from carnival.errors import NotFound, ValidationFailed
from carnival.models.safety_model import IncidentReport, INCIDENT_SEVERITIES, INCIDENT_STATUSES

logger = logging.getLogger(__name__)

EMERGENCY_DESCRIPTION = "Emergency alert triggered by user"
EMERGENCY_LOCATION_NAME = "Emergency location"


# ------------------ Emergency Alert ------------------
async def create_emergency_alert(db: Session, user_id: str, latitude: Optional[float] = None,
                                 longitude: Optional[float] = None):
    incident = IncidentReport(
        user_id=user_id,
        type="emergency",
        severity="critical",
        description=EMERGENCY_DESCRIPTION,
        location_lat=latitude if latitude is not None else 0,
        location_lng=longitude if longitude is not None else 0,
        location_name=EMERGENCY_LOCATION_NAME,
        images=[],
        status="reported",
    )
    db.add(incident)
    db.commit()
    db.refresh(incident)
    logger.warning("Emergency alert %s raised by user %s", incident.id, user_id)
    return incident


# ------------------ Incident Reports ------------------
async def add_incident_controller(db: Session, user_id: str, incident_data: dict):
    if incident_data["severity"] not in INCIDENT_SEVERITIES:
        raise ValidationFailed("Invalid severity. Must be: low, medium, high, or critical")
    for field in ("type", "description"):
        if not str(incident_data[field]).strip():
            raise ValidationFailed(f"Missing required fields: {field}")

    incident = IncidentReport(
        user_id=user_id,
        type=incident_data["type"],
        severity=incident_data["severity"],
        description=incident_data["description"],
        location_lat=incident_data["location_lat"],
        location_lng=incident_data["location_lng"],
        location_name=incident_data.get("location_name") or None,
        images=incident_data.get("images") or [],
        status="reported",
    )
    db.add(incident)
    db.commit()
    db.refresh(incident)
    return incident


async def retrieve_incidents_controller(db: Session, user_id: str):
    return (
        db.query(IncidentReport)
        .filter(IncidentReport.user_id == user_id)
        .order_by(IncidentReport.created_at.desc())
        .all()
    )


async def retrieve_incident_controller(db: Session, user_id: str, incident_id: str):
    incident = (
        db.query(IncidentReport)
        .filter(IncidentReport.id == incident_id, IncidentReport.user_id == user_id)
        .first()
    )
    if not incident:
        raise NotFound("Incident not found")
    return incident


async def update_incident_controller(db: Session, user_id: str, incident_id: str, update_data: dict):
    incident = await retrieve_incident_controller(db, user_id, incident_id)

    status = update_data.get("status")
    if status:
        if status not in INCIDENT_STATUSES:
            raise ValidationFailed("Invalid status")
        incident.status = status
        if status in ("resolved", "closed"):
            incident.resolved_at = utcnow()
            incident.resolved_by = user_id

    if "resolution_notes" in update_data:
        incident.resolution_notes = update_data["resolution_notes"]

    incident.updated_at = utcnow()
    db.commit()
    db.refresh(incident)
    return incident
