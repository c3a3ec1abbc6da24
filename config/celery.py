import os
from celery import Celery
from celery.schedules import crontab

# Django의 settings 모듈을 Celery의 기본 설정으로 지정
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('config')

# 문자열로 등록한 설정이 'CELERY'로 시작함을 알림
app.config_from_object('django.conf:settings', namespace='CELERY')

# INSTALLED_APPS에 등록된 모든 tasks.py를 자동으로 찾음
app.autodiscover_tasks()

# ========================================================
# Celery Beat 스케줄 정의
# ========================================================
app.conf.beat_schedule = {

    # 북마크 리마인더 발송 (5분마다 실행)
    # reminder_at이 지난 북마크에 알림을 만들고 리마인더를 비웁니다.
    'send-bookmark-reminders-every-5-min': {
        'task': 'topics.tasks.send_bookmark_reminders',
        'schedule': crontab(minute='*/5'),
    },
}
