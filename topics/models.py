from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.text import slugify


def default_tag_group_permissions():
    # 기본값: 모든 사용자에게 공개
    return {'everyone': TagGroup.PERMISSION_FULL}


class Tag(models.Model):
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class TagGroupQuerySet(models.QuerySet):
    def restricted(self):
        """everyone 권한이 없는 그룹만"""
        return self.exclude(permissions__has_key=TagGroup.EVERYONE)


class TagGroup(models.Model):
    """
    태그 묶음 + 역할별 공개 권한.
    permissions 예시: {"staff": 1}  -> 스태프에게만 보이는 숨김 태그 그룹
    """
    PERMISSION_FULL = 1
    PERMISSION_CREATE_POST = 2
    PERMISSION_READONLY = 3

    EVERYONE = 'everyone'
    STAFF = 'staff'
    ADMINS = 'admins'
    RESERVED_ROLES = frozenset({EVERYONE, STAFF, ADMINS})

    name = models.CharField(max_length=100, unique=True)
    tags = models.ManyToManyField(Tag, related_name='tag_groups', blank=True)
    # 역할 이름 -> 권한 레벨 (JSONField)
    permissions = models.JSONField(default=default_tag_group_permissions, blank=True)

    objects = TagGroupQuerySet.as_manager()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    @property
    def is_restricted(self):
        """everyone 권한이 없으면 일부 역할에게만 보이는 그룹"""
        return self.EVERYONE not in (self.permissions or {})

    def visible_roles(self):
        return set((self.permissions or {}).keys())


class Topic(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='topics')
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, blank=True, allow_unicode=True)

    # 외부 링크 (사이트 설정이 켜져 있을 때만 노출)
    featured_link = models.URLField(max_length=500, null=True, blank=True)

    tags = models.ManyToManyField(Tag, through='TopicTag', related_name='topics', blank=True)

    # 통계 / 카운터
    views = models.PositiveIntegerField(default=0)
    like_count = models.PositiveIntegerField(default=0)
    posts_count = models.PositiveIntegerField(default=0)
    highest_post_number = models.PositiveIntegerField(default=0)

    # 노출 상태
    visible = models.BooleanField(default=True)
    closed = models.BooleanField(default=False)
    archived = models.BooleanField(default=False)
    pinned_at = models.DateTimeField(null=True, blank=True)

    # created_at은 마이그레이션/가져오기 시 직접 지정할 수 있도록 auto_now_add를 쓰지 않음
    created_at = models.DateTimeField(default=timezone.now)
    bumped_at = models.DateTimeField(default=timezone.now)
    last_posted_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['-bumped_at'], name='topic_bumped_at_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.title, allow_unicode=True)[:255] or 'topic'
        super().save(*args, **kwargs)


class TopicTag(models.Model):
    """토픽-태그 연결. id 순서가 곧 태그가 붙은 순서"""
    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name='topic_tags')
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name='topic_tags')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['topic', 'tag'], name='unique_tag_per_topic'),
        ]


class Post(models.Model):
    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name='posts')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='posts')
    # 토픽 안에서 1부터 시작하는 순번 (저장 시 자동 부여)
    post_number = models.PositiveIntegerField(null=True, blank=True)
    raw = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['post_number']
        constraints = [
            models.UniqueConstraint(fields=['topic', 'post_number'], name='unique_post_number_per_topic'),
        ]

    def __str__(self):
        return f"{self.topic_id}#{self.post_number}"

    def save(self, *args, **kwargs):
        if self.post_number is not None:
            return super().save(*args, **kwargs)

        with transaction.atomic():
            # 동시에 두 글이 같은 번호를 받지 않도록 토픽 행을 잠금
            topic = Topic.objects.select_for_update().get(pk=self.topic_id)
            self.post_number = topic.highest_post_number + 1
            super().save(*args, **kwargs)

            updates = {
                'highest_post_number': self.post_number,
                'posts_count': F('posts_count') + 1,
                'last_posted_at': self.created_at,
            }
            # 첫 글은 토픽 생성이고, 답글부터 bump
            if self.post_number > 1:
                updates['bumped_at'] = self.created_at
            Topic.objects.filter(pk=topic.pk).update(**updates)


class Bookmark(models.Model):
    class ReminderType(models.IntegerChoices):
        LATER_TODAY = 1, '오늘 늦게'
        NEXT_BUSINESS_DAY = 2, '다음 영업일'
        TOMORROW = 3, '내일'
        NEXT_WEEK = 4, '다음 주'
        NEXT_MONTH = 5, '다음 달'
        CUSTOM = 6, '직접 지정'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookmarks')
    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name='bookmarks')
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name='bookmarks')
    name = models.CharField(max_length=100, null=True, blank=True)

    reminder_type = models.PositiveSmallIntegerField(choices=ReminderType.choices, null=True, blank=True)
    reminder_at = models.DateTimeField(null=True, blank=True)
    reminder_last_sent_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            # 같은 사용자가 같은 글을 두 번 북마크할 수 없음
            models.UniqueConstraint(fields=['user', 'post'], name='unique_bookmark_per_user_post'),
        ]
        indexes = [
            models.Index(fields=['reminder_at'], name='bookmark_reminder_at_idx'),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.post_id}"

    def clean(self):
        if self.post_id and self.topic_id and self.post.topic_id != self.topic_id:
            raise ValidationError({'post': '북마크한 글이 해당 토픽에 속하지 않습니다.'})
        if self.reminder_type == self.ReminderType.CUSTOM and self.reminder_at is None:
            raise ValidationError({'reminder_at': '직접 지정 리마인더는 시간이 필요합니다.'})

    def save(self, *args, **kwargs):
        if self.topic_id is None and self.post_id is not None:
            self.topic_id = self.post.topic_id

        if self.reminder_type and self.reminder_at is None:
            from .utils import reminder_at_for
            self.reminder_at = reminder_at_for(self.reminder_type)

        super().save(*args, **kwargs)


class SiteSetting(models.Model):
    """관리자가 런타임에 바꾸는 사이트 설정 (기본값은 settings.SITE_SETTING_DEFAULTS)"""
    name = models.CharField(max_length=100, unique=True)
    value = models.CharField(max_length=255)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name}={self.value}"

    @classmethod
    def set(cls, name, value):
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        setting, _ = cls.objects.update_or_create(name=name, defaults={'value': str(value)})
        return setting


class Notification(models.Model):
    class Type(models.IntegerChoices):
        BOOKMARK_REMINDER = 1, '북마크 리마인더'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    notification_type = models.PositiveSmallIntegerField(choices=Type.choices)
    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications')
    post_number = models.PositiveIntegerField(null=True, blank=True)
    data = models.JSONField(default=dict, blank=True)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"[{self.get_notification_type_display()}] user={self.user_id}"
