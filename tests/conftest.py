import threading
from typing import Dict, List, Optional

import pytest

from routing.distance import Coordinate
from vendors.directory import DirectoryUnavailableError, VendorDirectory
from vendors.models import Vendor


class FakeDirectory(VendorDirectory):
    """
    In-memory vendor directory. Per-shop failures are simulated by putting
    an exception instance in `profiles` / `pending`.
    """
    def __init__(self, vendors: List[Vendor], profiles: Optional[Dict] = None,
                 pending: Optional[Dict] = None, listing_error: Optional[Exception] = None):
        self.vendors = vendors
        self.profiles = profiles or {}
        self.pending = pending or {}
        self.listing_error = listing_error
        self.lookup_threads = set()
        self.profile_calls = []
        self.pending_calls = []
        self._lock = threading.Lock()

    def list_active_vendors(self):
        if self.listing_error is not None:
            raise self.listing_error
        return list(self.vendors)

    def get_delivery_profile(self, vendor_id):
        with self._lock:
            self.profile_calls.append(vendor_id)
            self.lookup_threads.add(threading.get_ident())
        value = self.profiles.get(vendor_id)
        if isinstance(value, Exception):
            raise value
        return value

    def count_pending_orders(self, vendor_id):
        with self._lock:
            self.pending_calls.append(vendor_id)
        value = self.pending.get(vendor_id, 0)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def customer_location():
    # Connaught Place, New Delhi
    return Coordinate(lat=28.6315, lng=77.2167)


@pytest.fixture
def make_vendor():
    def _make(vendor_id, lat=None, lng=None, name=None, **details):
        coordinates = Coordinate(lat=lat, lng=lng) if lat is not None and lng is not None else None
        return Vendor(id=vendor_id, name=name or f"Shop {vendor_id}", coordinates=coordinates, details=details)
    return _make


@pytest.fixture
def make_directory():
    return FakeDirectory


@pytest.fixture
def unavailable_error():
    return DirectoryUnavailableError("backend down")
