#Expose the rider-assignment pieces:
#Rider model + assignment result
#Eligibility filter (hard rules)
#assign_rider (the "one call" entry point)

from .models import Rider, RiderAssignment
from .policy import AssignmentPolicy, default_assignment_policy
from .selection import assign_rider, filter_eligible_riders

__all__ = [
    "Rider",
    "RiderAssignment",
    "AssignmentPolicy",
    "default_assignment_policy",
    "filter_eligible_riders",
    "assign_rider",
]
