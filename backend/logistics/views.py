import logging

from django.conf import settings
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from routing.distance import Coordinate, InvalidCoordinateError
from vendors.directory import DirectoryUnavailableError
from vendors.nearby import InvalidRadiusError, get_nearby_vendors_with_eta
from vendors.policy import NearbyPolicy

from .directory import OrmVendorDirectory
from .serializers import NearbyVendorsQuerySerializer, VendorWithEtaSerializer

logger = logging.getLogger(__name__)


def nearby_policy_from_settings():
    policy = NearbyPolicy(
        default_radius_km=settings.NEARBY_DEFAULT_RADIUS_KM,
        business_timezone=settings.TIME_ZONE,
        max_lookup_workers=settings.NEARBY_LOOKUP_WORKERS,
    )
    policy.validate()
    return policy


class NearbyVendorsView(APIView):
    """
    GET /api/v1/vendors/nearby/?lat=..&lng=..&radiusKm=..

    Public: shops within radiusKm (default 2) of the customer, closest
    first, each with a delivery ETA window.
    """
    permission_classes = [permissions.AllowAny]
    directory_class = OrmVendorDirectory

    def get_directory(self):
        return self.directory_class()

    def get(self, request):
        query = NearbyVendorsQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(
                {"error": "Invalid query parameters", "details": query.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        policy = nearby_policy_from_settings()
        params = query.validated_data
        radius_km = params.get("radiusKm", policy.default_radius_km)

        try:
            result = get_nearby_vendors_with_eta(
                self.get_directory(),
                Coordinate(lat=params["lat"], lng=params["lng"]),
                radius_km,
                policy=policy,
            )
        except (InvalidCoordinateError, InvalidRadiusError) as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except DirectoryUnavailableError:
            # already logged by the orchestrator
            return Response(
                {"error": "Shop directory is temporarily unavailable"},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        vendors = VendorWithEtaSerializer([vendor.to_dict() for vendor in result.vendors], many=True)
        return Response({
            "vendors": vendors.data,
            "count": result.count,
            "userLocation": result.origin.as_dict(),
            "radiusKm": result.radius_km,
            "peakHour": result.peak_hour,
        })
