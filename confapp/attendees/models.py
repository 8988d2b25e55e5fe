from django.db import models
from django.utils.translation import gettext_lazy as _


class Attendee(models.Model):
    """A registered app installation.

    The mobile client generates ``token`` once and presents it afterwards as
    a bearer credential.
    """

    token = models.CharField(_("Token"), max_length=255, unique=True)
    remote_ip = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Attendee({self.pk})"
