from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class LiveConfig(AppConfig):
    name = "confapp.live"
    verbose_name = _("Live videos")

    def ready(self):
        import confapp.live.signals  # noqa: F401, PLC0415
