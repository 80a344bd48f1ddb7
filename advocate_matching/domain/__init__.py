"""Domain records for advocates and sales opportunities."""

from .models import Advocate, AdvocateStatus, CompanySize, Opportunity

__all__ = ["Advocate", "AdvocateStatus", "CompanySize", "Opportunity"]
