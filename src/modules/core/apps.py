from pathlib import Path

from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = "modules.core"
    label = "core"
    # Namespace package: Django cannot infer the filesystem path itself.
    path = str(Path(__file__).resolve().parent)
