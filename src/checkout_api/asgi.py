from __future__ import annotations

from checkout_api.adapters.inbound.web.fastapi_app import create_app
from checkout_api.bootstrap import build_usecases
from checkout_api.config import load_settings
from checkout_api.logging_setup import configure_logging

settings = load_settings()
configure_logging(settings)
usecases = build_usecases(settings)
app = create_app(usecases.checkout)
