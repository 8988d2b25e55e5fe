"""
ASGI entrypoint: the REST API plus the Socket.IO event stream.

Run with an ASGI server (``uvicorn config.asgi:application``). Mobile clients
connect to Socket.IO at ``/ws/events/``; every other request falls through to
Django.
"""

import os
import sys
from pathlib import Path

from django.core.asgi import get_asgi_application

BASE_DIR = Path(__file__).resolve(strict=True).parent.parent
sys.path.append(str(BASE_DIR / "confapp"))

# Deployed images default to production settings; local dev sets BUILD_ENV.
if "DJANGO_SETTINGS_MODULE" not in os.environ:
    os.environ["DJANGO_SETTINGS_MODULE"] = (
        "config.settings.local"
        if os.environ.get("BUILD_ENV", "production").lower() == "local"
        else "config.settings.production"
    )

# Django must be set up before the realtime module touches the ORM.
django_application = get_asgi_application()

from socketio import ASGIApp  # noqa: E402

from confapp.realtime.socketio import sio  # noqa: E402

application = ASGIApp(
    sio,
    other_asgi_app=django_application,
    socketio_path="ws/events",
)
