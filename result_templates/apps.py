from django.apps import AppConfig


class ResultTemplatesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "result_templates"
    verbose_name = "Result Templates"
