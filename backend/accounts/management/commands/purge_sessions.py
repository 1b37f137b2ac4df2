from django.core.management.base import BaseCommand

from accounts.sessions import purge_expired_sessions


class Command(BaseCommand):
    help = "Delete client sessions past their expiry"

    def handle(self, *args, **kwargs):
        deleted = purge_expired_sessions()
        self.stdout.write(self.style.SUCCESS(f"✅ Purged {deleted} expired session(s)"))
