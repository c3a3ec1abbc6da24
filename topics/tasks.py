# topics/tasks.py

import logging

from celery import shared_task
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .models import Bookmark, Notification
from .site_settings import SiteSettings

logger = logging.getLogger(__name__)


@shared_task
def send_bookmark_reminders():
    """
    reminder_at이 지난 북마크마다 알림을 하나 만들고 리마인더를 비웁니다.
    (같은 북마크로 알림이 두 번 나가지 않도록 행 잠금 후 재확인)
    """
    if not SiteSettings.load().is_enabled('enable_bookmarks_with_reminders'):
        logger.info("[Reminder] bookmarks with reminders disabled. Skipping.")
        return 0

    now = timezone.now()
    due_ids = list(
        Bookmark.objects.filter(reminder_at__isnull=False, reminder_at__lte=now)
        .order_by('reminder_at')
        .values_list('id', flat=True)[:settings.BOOKMARK_REMINDER_BATCH_SIZE]
    )

    sent = 0
    for bookmark_id in due_ids:
        with transaction.atomic():
            bookmark = (
                Bookmark.objects.select_for_update()
                .select_related('post', 'topic')
                .filter(id=bookmark_id, reminder_at__isnull=False, reminder_at__lte=now)
                .first()
            )
            if bookmark is None:
                # 다른 워커가 이미 처리했거나 사용자가 리마인더를 지움
                continue

            Notification.objects.create(
                user_id=bookmark.user_id,
                notification_type=Notification.Type.BOOKMARK_REMINDER,
                topic=bookmark.topic,
                post_number=bookmark.post.post_number,
                data={
                    'bookmark_id': bookmark.id,
                    'bookmark_name': bookmark.name,
                    'topic_title': bookmark.topic.title,
                },
            )

            bookmark.reminder_at = None
            bookmark.reminder_type = None
            bookmark.reminder_last_sent_at = now
            bookmark.save(update_fields=['reminder_at', 'reminder_type', 'reminder_last_sent_at', 'updated_at'])
            sent += 1

    logger.info(f"[Reminder] Sent {sent} bookmark reminders.")
    return sent
