from django.apps import AppConfig


class DiscountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "discounts"

    def ready(self) -> None:
        from discounts import signals  # noqa: F401
