from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Print the effective media storage configuration and optionally run a tiny upload round trip."

    def add_arguments(self, parser):
        parser.add_argument("--write-test", action="store_true", help="Upload and delete a small test file.")

    def handle(self, *args, **options):
        self.stdout.write("== Storage configuration ==")
        self.stdout.write(f"DEBUG: {settings.DEBUG}")
        self.stdout.write(f"MEDIA_URL: {settings.MEDIA_URL}")
        self.stdout.write(f"STORAGES.default: {settings.STORAGES.get('default')}")
        self.stdout.write(f"default_storage class: {type(default_storage).__name__}")
        self.stdout.write(f"Supabase project: {settings.SUPABASE_PROJECT_URL or '(not configured)'}")
        self.stdout.write(f"Supabase bucket: {settings.SUPABASE_BUCKET}")

        if not options["write_test"]:
            return
        self.stdout.write("\n== Upload test ==")
        name = default_storage.save("check/hello.txt", ContentFile(b"hello from print_storage_info"))
        try:
            self.stdout.write(f"Saved as: {name}")
            self.stdout.write(f"Public URL: {default_storage.url(name)}")
        finally:
            default_storage.delete(name)
        self.stdout.write(self.style.SUCCESS("Done."))
