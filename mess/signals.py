from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from . import realtime
from .models import Announcement, DailyMenu


def announcement_row(instance):
    from .serializers import AnnouncementSerializer
    return dict(AnnouncementSerializer(instance).data)


def daily_menu_row(instance):
    from .serializers import DailyMenuSerializer
    return dict(DailyMenuSerializer(instance).data)


def publish_on_commit(table, event, row):
    # rows are serialized now; a rolled back write publishes nothing
    transaction.on_commit(partial(realtime.publish, table, event, row))


@receiver(post_save, sender=Announcement)
def publish_announcement(sender, instance, created, **kwargs):
    publish_on_commit("announcements", "INSERT" if created else "UPDATE", announcement_row(instance))


@receiver(post_delete, sender=Announcement)
def publish_announcement_delete(sender, instance, **kwargs):
    publish_on_commit("announcements", "DELETE", {"id": instance.pk})


@receiver(post_save, sender=DailyMenu)
def publish_daily_menu(sender, instance, created, **kwargs):
    publish_on_commit("daily_menus", "INSERT" if created else "UPDATE", daily_menu_row(instance))


@receiver(post_delete, sender=DailyMenu)
def publish_daily_menu_delete(sender, instance, **kwargs):
    publish_on_commit("daily_menus", "DELETE", {"id": instance.pk})
