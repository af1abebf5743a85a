from django.core.management.base import BaseCommand
from django.utils.timezone import now
from mess.models import Announcement


class Command(BaseCommand):
    help = "Deactivates announcements whose expiry time is in the past"

    def handle(self, *args, **options):
        current_time = now()
        expired_count = 0

        # Active announcements with an expiry set
        candidates = Announcement.objects.filter(is_active=True, expires_at__isnull=False)

        for announcement in candidates:
            if announcement.expires_at >= current_time:
                continue
            announcement.is_active = False
            announcement.status = "expired"
            # save() per row so the change feed sees each update
            announcement.save(update_fields=["is_active", "status", "updated_at"])
            expired_count += 1

        if expired_count > 0:
            self.stdout.write(self.style.SUCCESS(
                f"Expired {expired_count} announcement(s)."
            ))
        else:
            self.stdout.write("No announcements to expire.")
