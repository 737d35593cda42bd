#Purpose: The vendor directory "adapter/client" boundary.
#Sole responsibility: read shops, delivery profiles and pending-order counts
#from whichever backend owns them and return normalized outputs.
#Encapsulates backend-specific details:
#query names and argument shapes
#timeouts / error envelopes
#parsing response JSON into Vendor / VendorDeliveryProfile
#It should not contain ETA rules or geofencing.

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

import requests
from dotenv import load_dotenv

from routing.eta_service import VendorDeliveryProfile

from .models import Vendor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DirectoryUnavailableError(RuntimeError):
    """The vendor directory (or one of its lookups) could not be reached."""
    pass


class VendorDirectory(ABC):
    """
    Read-only collaborator the nearby-vendor query depends on.
    Implementations: HttpVendorDirectory (managed backend), and the
    Django ORM directory in backend/logistics.
    """

    @abstractmethod
    def list_active_vendors(self) -> List[Vendor]:
        """All active shops. May include shops without coordinates."""

    @abstractmethod
    def get_delivery_profile(self, vendor_id: str) -> Optional[VendorDeliveryProfile]:
        """The shop's own profile, or None when it has not configured one."""

    @abstractmethod
    def count_pending_orders(self, vendor_id: str) -> int:
        """Orders accepted by the shop but not yet delivered."""


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """
    Outcome of one per-vendor collaborator call.
    On failure `value` already holds the fallback, so callers can use it
    unconditionally and only look at `error` for logging.
    """
    value: T
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def safe_lookup(call: Callable[[], T], fallback: T) -> LookupResult[T]:
    """
    Run one collaborator call and turn any exception into a failed
    LookupResult carrying `fallback`. Used for per-vendor lookups only,
    where one shop's failure must not sink the whole response.
    """
    try:
        return LookupResult(value=call())
    except Exception as exc:
        return LookupResult(value=fallback, error=exc)


# Read the managed backend URL from environment
# Example in .env:
# DIRECTORY_BASE_URL=https://happy-otter-123.convex.cloud
load_dotenv()
BASE_URL = os.getenv("DIRECTORY_BASE_URL")
TIMEOUT_SECONDS = float(os.getenv("DIRECTORY_TIMEOUT_SECONDS", "5"))

#the storefront backend never returns more shops than this per query
MAX_ACTIVE_VENDORS = 1000


class HttpVendorDirectory(VendorDirectory):
    """
    Managed-backend adapter / client

    Sole responsibility:
    - Talk to the backend's HTTP query API
    - Return Vendor / VendorDeliveryProfile / int

    Wire format:
        POST {base_url}/api/query {"path": "shops:searchShops", "args": {...}, "format": "json"}
        -> {"status": "success", "value": ...} | {"status": "error", "errorMessage": "..."}
    """
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or BASE_URL or "").rstrip("/")
        self.timeout = timeout if timeout is not None else TIMEOUT_SECONDS #seconds to wait before giving up

        if not self.base_url:
            raise ValueError("Directory base URL not set. Please set DIRECTORY_BASE_URL in the .env file.")

    def query(self, path: str, args: Dict[str, Any]) -> Any:
        """
        Run one backend query function and return its `value`.
        Raises DirectoryUnavailableError on transport or backend errors.
        """
        url = f"{self.base_url}/api/query"
        try:
            response = requests.post(
                url,
                json={"path": path, "args": args, "format": "json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as exc:
            raise DirectoryUnavailableError(f"{path} failed: {exc}") from exc
        except ValueError as exc:
            raise DirectoryUnavailableError(f"{path} returned invalid JSON") from exc

        #validating backend envelope
        if data.get("status") != "success":
            raise DirectoryUnavailableError(f"{path} error: {data.get('errorMessage', 'Unknown error')}")

        return data.get("value")

    def list_active_vendors(self) -> List[Vendor]:
        documents = self.query(
            "shops:searchShops",
            {"query": "", "is_active": True, "limit": MAX_ACTIVE_VENDORS},
        ) or []

        vendors: List[Vendor] = []
        for document in documents:
            try:
                vendors.append(Vendor.from_document(document))
            except (ValueError, AttributeError) as exc:
                logger.warning("Skipping malformed shop document: %s", exc)
        return vendors

    def get_delivery_profile(self, vendor_id: str) -> Optional[VendorDeliveryProfile]:
        document = self.query("shops:getShop", {"id": vendor_id})
        if not document or not document.get("delivery_profile"):
            return None
        return VendorDeliveryProfile.from_dict(document["delivery_profile"])

    def count_pending_orders(self, vendor_id: str) -> int:
        orders = self.query(
            "orders:getOrdersByShop",
            {"shop_id": vendor_id, "status": "pending"},
        )
        if orders is None:
            return 0
        if not isinstance(orders, list):
            raise DirectoryUnavailableError(
                f"orders:getOrdersByShop returned {type(orders).__name__}, expected a list"
            )
        return len(orders)
