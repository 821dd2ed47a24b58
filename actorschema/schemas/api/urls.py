"""
Actor schema API URL routing.

- GET /api/actors/:actor_id/input-schema
"""

from django.urls import path

from actorschema.schemas.api import views

app_name = "schemas"

urlpatterns = [
    path(
        "<str:actor_id>/input-schema",
        views.actor_input_schema,
        name="actor-input-schema",
    ),
]
