"""
Management command to resolve an actor's input schema.

Usage:
    python manage.py resolve_actor_schema "apify~web-scraper"

    # Show which stages ran and what each produced:
    python manage.py resolve_actor_schema "apify~web-scraper" --trace

    # Token from the command line instead of APIFY_TOKEN:
    python manage.py resolve_actor_schema "apify~web-scraper" --token "apify_api_..."

Prints the resolved schema as JSON on stdout ({} if nothing was found).
"""

from __future__ import annotations

import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from actorschema.schemas.resolver import SchemaResolutionError, resolve_actor_input_schema


class Command(BaseCommand):
    """Resolve and print the input schema of an Apify actor."""

    help = "Resolve and print the input schema of an Apify actor"

    def add_arguments(self, parser):
        parser.add_argument(
            "actor_id",
            type=str,
            help="Apify actor ID (e.g., 'apify~web-scraper')",
        )
        parser.add_argument(
            "--token",
            type=str,
            help="Apify API token (default: APIFY_TOKEN setting)",
        )
        parser.add_argument(
            "--indent",
            type=int,
            default=2,
            help="JSON indent for output (default: 2)",
        )
        parser.add_argument(
            "--trace",
            action="store_true",
            help="Print per-stage outcomes to stderr",
        )

    def handle(self, *args, **options):
        actor_id = options["actor_id"]
        token = options.get("token") or getattr(settings, "APIFY_TOKEN", "")
        if not token:
            raise CommandError("APIFY_TOKEN not set. Add it to .env or pass --token.")

        try:
            resolution = resolve_actor_input_schema(actor_id, token)
        except SchemaResolutionError as e:
            raise CommandError(
                f"Could not fetch actor {actor_id} (status={e.status_code}): {e.message}"
            ) from e

        if options["trace"]:
            for attempt in resolution.attempts:
                line = f"{attempt.stage}: {attempt.outcome}"
                if attempt.error_summary:
                    line += f" ({attempt.error_summary})"
                self.stderr.write(line)
            self.stderr.write(f"source: {resolution.source or 'none'}")

        self.stdout.write(json.dumps(resolution.schema, indent=options["indent"]))
