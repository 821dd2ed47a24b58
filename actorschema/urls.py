"""
URL configuration for the actorschema backend.

- GET /health/
- GET /api/actors/:actor_id/input-schema
"""

from django.urls import include, path

from actorschema import views

urlpatterns = [
    path("health/", views.healthcheck, name="healthcheck"),
    path(
        "api/actors/",
        include("actorschema.schemas.api.urls", namespace="schemas"),
    ),
]
