from django.urls import path
from logistics.views import NearbyVendorsView

urlpatterns = [
    path('api/v1/vendors/nearby/', NearbyVendorsView.as_view(), name='vendors-nearby'),
]
