from django.apps import AppConfig


class ContentToolsConfig(AppConfig):
    name = 'content_tools'
    verbose_name = 'ContentTools editor'
