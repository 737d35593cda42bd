"""
Purpose: Package entry + stable exports.
What it does:

Marks vendors as a Python package and re-exports the public API so other
modules can do:

from vendors import get_nearby_vendors_with_eta, VendorDirectory

Should not contain business logic.
"""
from .directory import (
    DirectoryUnavailableError,
    HttpVendorDirectory,
    LookupResult,
    VendorDirectory,
    safe_lookup,
)
from .models import Vendor, VendorWithEta
from .nearby import InvalidRadiusError, NearbyVendorsResult, get_nearby_vendors_with_eta
from .policy import NearbyPolicy, default_nearby_policy, policy_from_env

__all__ = ["Vendor",
           "VendorWithEta",
             "VendorDirectory",
             "HttpVendorDirectory",
             "DirectoryUnavailableError",
             "LookupResult",
             "safe_lookup",
               "NearbyPolicy",
               "default_nearby_policy",
               "policy_from_env",
               "InvalidRadiusError",
               "NearbyVendorsResult",
               "get_nearby_vendors_with_eta",
               ]
