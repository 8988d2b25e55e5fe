from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class FavoritesConfig(AppConfig):
    name = "confapp.favorites"
    verbose_name = _("Favorites")
