from pathlib import Path

from django.apps import AppConfig


class ProductsConfig(AppConfig):
    name = "modules.products"
    label = "products"
    # Namespace package: Django cannot infer the filesystem path itself.
    path = str(Path(__file__).resolve().parent)
