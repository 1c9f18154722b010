# Domain Value Objects
from .appointment_status import AppointmentStatus
from .vitals import Vitals

__all__ = ["AppointmentStatus", "Vitals"]
