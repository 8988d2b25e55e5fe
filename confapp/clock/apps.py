from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _

from confapp.clock.service import VirtualClock


class ClockConfig(AppConfig):
    name = "confapp.clock"
    verbose_name = _("Demo clock")

    def ready(self):
        # One clock per process; the override is never persisted.
        self.clock = VirtualClock()
