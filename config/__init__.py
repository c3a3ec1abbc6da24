# Django 시작 시 Celery 앱이 함께 로드되도록 해서 @shared_task가 이 앱을 사용하게 함
from .celery import app as celery_app

__all__ = ('celery_app',)
