from django.db.models.signals import post_delete
from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from confapp.realtime.events.live import publish_live_changed

from .models import LiveVideo


@receiver(post_save, sender=LiveVideo)
def send_live_saved_ws(sender, instance, **kwargs):
    on_commit(publish_live_changed)


@receiver(post_delete, sender=LiveVideo)
def send_live_deleted_ws(sender, instance, **kwargs):
    on_commit(publish_live_changed)
