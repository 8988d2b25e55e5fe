from django.conf import settings
from django.contrib import admin
from django.contrib.staticfiles.urls import staticfiles_urlpatterns
from django.urls import include
from django.urls import path
from drf_spectacular.views import SpectacularAPIView
from drf_spectacular.views import SpectacularSwaggerView

from .health import health as health_view

API_ROUTER = ("config.api_router", "api")

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),
    path("health/", health_view, name="health"),
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="api-schema-v1"),
    path(
        "api/v1/docs/",
        SpectacularSwaggerView.as_view(url_name="api-schema-v1"),
        name="api-docs-v1",
    ),
    path("api/v1/", include(API_ROUTER, namespace="api_v1")),
    # Released app builds call the unversioned paths (`/votes`, `/time/...`).
    # Must stay last: it matches everything the routes above do not.
    path("", include(API_ROUTER, namespace="api")),
]

if settings.DEBUG:
    # Static file serving when using Uvicorn for local Socket.IO development
    urlpatterns += staticfiles_urlpatterns()
