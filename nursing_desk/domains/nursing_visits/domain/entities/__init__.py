# Domain Entities
from .appointment import Appointment
from .nurse import Nurse, NurseSession
from .patient import Patient
from .visit_record import VisitRecord

__all__ = ["Appointment", "Nurse", "NurseSession", "Patient", "VisitRecord"]
