"""
WSGI entrypoint for the REST API only.

Realtime pushes (clock jumps, live videos, votes) need the ASGI application in
``config.asgi``; under WSGI they are emitted to a server nobody listens to.
"""

import os
import sys
from pathlib import Path

from django.core.wsgi import get_wsgi_application

BASE_DIR = Path(__file__).resolve(strict=True).parent.parent
sys.path.append(str(BASE_DIR / "confapp"))

if "DJANGO_SETTINGS_MODULE" not in os.environ:
    os.environ["DJANGO_SETTINGS_MODULE"] = (
        "config.settings.local"
        if os.environ.get("BUILD_ENV", "production").lower() == "local"
        else "config.settings.production"
    )

application = get_wsgi_application()
