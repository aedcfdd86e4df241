from django.core.management.base import BaseCommand, CommandError

from catalog.loader import CatalogUnavailable, load_entries, load_static_catalog, read_entries


class Command(BaseCommand):
    help = "Load the static JLPT sets, or one JSON file of cards into a set"

    def add_arguments(self, parser):
        parser.add_argument("--file", help="JSON file to load instead of the static sets")
        parser.add_argument("--set", dest="set_id", help="Set id for cards loaded from --file")

    def handle(self, *args, **options):
        file_name = options.get("file")
        try:
            if file_name:
                entries = read_entries(file_name)
                created = load_entries(entries, set_id=options.get("set_id"))
                self.stdout.write(
                    self.style.SUCCESS(
                        f"Loaded {len(entries)} cards ({created} new) from {file_name}"
                    )
                )
            else:
                loaded = load_static_catalog()
                summary = ", ".join(f"{k}={v}" for k, v in loaded.items())
                self.stdout.write(self.style.SUCCESS(f"Static catalog loaded: {summary}"))
        except CatalogUnavailable as e:
            raise CommandError(f"Error loading catalog: {e}") from e
