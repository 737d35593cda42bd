from django.db import models
from django.conf import settings

from routing.distance import Coordinate
from routing.eta_service import VendorDeliveryProfile


class Shop(models.Model):
    """
    Represents a physical store added by a shopkeeper.
    Owner is the User who manages this shop.
    A shop without lat/lng is listed but never shows up as "nearby".
    """
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='shops')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    address_text = models.TextField(blank=True, help_text="Landmark based address")

    # Geolocation for calculating distance to the customer
    lat = models.FloatField(blank=True, null=True)
    lng = models.FloatField(blank=True, null=True)

    is_active = models.BooleanField(default=True)
    rating = models.FloatField(blank=True, null=True)
    total_orders = models.PositiveIntegerField(default=0)
    logo_url = models.URLField(blank=True, null=True)

    # Delivery profile. All four must be set for the shop's own profile to be used;
    # otherwise the platform default applies.
    base_prep_minutes = models.FloatField(blank=True, null=True)
    max_parallel_orders = models.PositiveIntegerField(blank=True, null=True)
    buffer_minutes = models.FloatField(blank=True, null=True)
    avg_rider_speed_kmph = models.FloatField(blank=True, null=True)

    def __str__(self):
        return self.name

    def coordinates(self):
        """Coordinate, or None when missing or out of range."""
        return Coordinate.parse({"lat": self.lat, "lng": self.lng})

    def delivery_profile(self):
        values = (self.base_prep_minutes, self.max_parallel_orders, self.buffer_minutes, self.avg_rider_speed_kmph)
        if any(value is None for value in values):
            return None
        # not validated here; the nearby query falls back on invalid profiles
        return VendorDeliveryProfile(
            base_prep_minutes=self.base_prep_minutes,
            max_parallel_orders=self.max_parallel_orders,
            buffer_minutes=self.buffer_minutes,
            avg_rider_speed_kmph=self.avg_rider_speed_kmph,
        )


class Order(models.Model):
    """
    Central model for the marketplace workflow.
    Tracks lifecycle: Created -> Accepted -> Ready -> Picked Up -> Delivered.
    """
    class Status(models.TextChoices):
        CREATED = "CREATED", "Created"
        ACCEPTED = "ACCEPTED", "Accepted by Shop"
        READY_FOR_PICKUP = "READY", "Ready for Pickup"
        PICKED_UP = "PICKED_UP", "Picked Up"
        DELIVERED = "DELIVERED", "Delivered"
        CANCELLED = "CANCELLED", "Cancelled"

    # Still sitting in the shop's packing queue
    PENDING_STATUSES = (Status.CREATED, Status.ACCEPTED, Status.READY_FOR_PICKUP)

    # Relationships
    customer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='orders')
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='orders')

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CREATED)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Order #{self.id} - {self.status}"
