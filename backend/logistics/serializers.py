import math

from rest_framework import serializers


class NearbyVendorsQuerySerializer(serializers.Serializer):
    """
    Query string for GET /vendors/nearby.
    `userLat`/`userLon` are accepted as older aliases of `lat`/`lng`.
    """
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)
    radiusKm = serializers.FloatField(required=False)

    ALIASES = {"userLat": "lat", "userLon": "lng", "lon": "lng"}

    def __init__(self, *args, **kwargs):
        data = kwargs.get("data")
        if data is not None:
            normalized = {key: data.get(key) for key in data.keys()}
            for alias, name in self.ALIASES.items():
                if alias in normalized and name not in normalized:
                    normalized[name] = normalized.pop(alias)
            kwargs["data"] = normalized
        super().__init__(*args, **kwargs)

    def _finite(self, value):
        if not math.isfinite(value):
            raise serializers.ValidationError("Must be a finite number.")
        return value

    def validate_lat(self, value):
        return self._finite(value)

    def validate_lng(self, value):
        return self._finite(value)

    def validate_radiusKm(self, value):
        self._finite(value)
        if value <= 0:
            raise serializers.ValidationError("radiusKm must be greater than 0.")
        return value


class EtaWindowSerializer(serializers.Serializer):
    minEta = serializers.IntegerField()
    maxEta = serializers.IntegerField()


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField()
    lng = serializers.FloatField()


class VendorWithEtaSerializer(serializers.Serializer):
    """Serializes VendorWithEta.to_dict() payloads."""
    id = serializers.CharField()
    name = serializers.CharField()
    distanceKm = serializers.FloatField()
    eta = EtaWindowSerializer()
    location = LocationSerializer(allow_null=True)
    description = serializers.CharField(allow_null=True, allow_blank=True)
    logo_url = serializers.CharField(allow_null=True, allow_blank=True)
    rating = serializers.FloatField(allow_null=True)
    total_orders = serializers.IntegerField(allow_null=True)
    is_active = serializers.BooleanField(allow_null=True)
