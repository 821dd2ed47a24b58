"""Django app configuration for actor input-schema resolution."""

from django.apps import AppConfig


class SchemasConfig(AppConfig):
    name = "actorschema.schemas"
    label = "schemas"
    verbose_name = "Actor Input Schemas"
