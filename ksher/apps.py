from django.apps import AppConfig


class KsherPaymentsConfig(AppConfig):
    name = 'ksher'
    verbose_name = 'Ksher Payments'
