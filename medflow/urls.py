"""
URL configuration for the MedFlow backend project.

The `urlpatterns` list routes URLs to views.  This module includes
the Django admin, the API routes provided by the ``clinic`` and
``inventory`` apps and the OpenAPI documentation exposed at
``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="MedFlow API",
    default_version='v1',
    description="Patient records, billing and pharmaceutical inventory services.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # Django admin site (useful for development)
    path('admin/', admin.site.urls),
    path('', include('django_prometheus.urls')),
    # API routes
    path('', include('clinic.routers')),
    path('', include('inventory.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
