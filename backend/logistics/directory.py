import logging

from django.db import DatabaseError
from django.db.models import Count, Q

from vendors.directory import DirectoryUnavailableError, VendorDirectory
from vendors.models import Vendor

from .models import Order, Shop

logger = logging.getLogger(__name__)


class OrmVendorDirectory(VendorDirectory):
    """
    VendorDirectory backed by the logistics tables.

    list_active_vendors loads every active shop together with its pending-order
    count in one query and caches the per-shop answers, so the per-shop lookups
    that follow (run on worker threads) are instant and never open their own
    database connection. Shops that were not listed fall back to a direct query.
    """

    def __init__(self):
        self._profiles = {}
        self._pending_orders = {}

    def list_active_vendors(self):
        try:
            shops = list(
                Shop.objects.filter(is_active=True)
                .annotate(pending_orders=Count('orders', filter=Q(orders__status__in=Order.PENDING_STATUSES)))
                .order_by('id')
            )
        except DatabaseError as exc:
            raise DirectoryUnavailableError(f"shop listing failed: {exc}") from exc

        vendors = []
        for shop in shops:
            vendor_id = str(shop.pk)
            self._profiles[vendor_id] = shop.delivery_profile()
            self._pending_orders[vendor_id] = shop.pending_orders

            vendors.append(
                Vendor(
                    id=vendor_id,
                    name=shop.name,
                    coordinates=shop.coordinates(),
                    details={
                        "description": shop.description,
                        "logo_url": shop.logo_url,
                        "rating": shop.rating,
                        "total_orders": shop.total_orders,
                        "is_active": shop.is_active,
                    },
                )
            )

        logger.debug("Loaded %d active shops", len(vendors))
        return vendors

    def get_delivery_profile(self, vendor_id):
        if vendor_id in self._profiles:
            return self._profiles[vendor_id]

        shop = Shop.objects.filter(pk=vendor_id).first()
        return shop.delivery_profile() if shop else None

    def count_pending_orders(self, vendor_id):
        if vendor_id in self._pending_orders:
            return self._pending_orders[vendor_id]

        return Order.objects.filter(shop_id=vendor_id, status__in=Order.PENDING_STATUSES).count()
