from django.core.management.base import BaseCommand, CommandError

from apps.catalog.container import build_catalog_service
from apps.common.i18n import iter_supported_languages, normalize_language_code
from apps.remote.exceptions import RemoteAPIError
from apps.remote.session import build_session

WARMER_GUEST_ID = "catalog_warmer"


class Command(BaseCommand):
    help = "Load products, categories and packages from the store backend into the catalog cache."

    def add_arguments(self, parser):
        parser.add_argument(
            "--invalidate",
            action="store_true",
            help="Bump the catalog cache version before loading",
        )
        parser.add_argument(
            "--language",
            action="append",
            dest="languages",
            help="Language to warm (repeatable); defaults to every supported language",
        )

    def handle(self, *args, **options):
        languages = [normalize_language_code(l) for l in options["languages"] or []]
        languages = languages or list(iter_supported_languages())

        if options["invalidate"]:
            session = build_session(WARMER_GUEST_ID)
            version = build_catalog_service(session).invalidate()
            self.stdout.write(f"Catalog cache version bumped to {version}")

        for language in languages:
            session = build_session(WARMER_GUEST_ID, language=language)
            service = build_catalog_service(session)
            self.stdout.write(f"Warming catalog ({language})...")
            try:
                products = service.list_products(language=language)
                categories = service.list_categories(language=language)
                packages = service.list_packages(language=language)
            except RemoteAPIError as exc:
                raise CommandError(f"Store backend request failed: {exc}") from exc
            self.stdout.write(
                f"  {len(products)} products, {len(categories)} categories, {len(packages)} packages"
            )

        self.stdout.write(self.style.SUCCESS("Catalog cache warmed."))
