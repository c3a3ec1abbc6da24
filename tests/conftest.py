"""
공통 픽스처: 사용자 / 토픽 / 태그 생성 헬퍼
"""

from datetime import timedelta

import pytest
from django.contrib.auth.models import User
from django.utils import timezone

from topics.models import Post, Tag, TagGroup, Topic, TopicTag
from topics.site_settings import SiteSettings


@pytest.fixture
def user(db):
    return User.objects.create_user(username="user", password="pw")


@pytest.fixture
def admin(db):
    return User.objects.create_superuser(username="admin", password="pw", email="admin@example.com")


@pytest.fixture
def make_topic(db, user):
    def _make(**kwargs):
        now = timezone.now()
        kwargs.setdefault("user", user)
        kwargs.setdefault("title", "This is a test topic title")
        kwargs.setdefault("created_at", now - timedelta(minutes=2))
        kwargs.setdefault("bumped_at", now)
        return Topic.objects.create(**kwargs)
    return _make


@pytest.fixture
def topic(make_topic):
    return make_topic()


@pytest.fixture
def make_post(db):
    def _make(topic, user, raw="hello world"):
        return Post.objects.create(topic=topic, user=user, raw=raw)
    return _make


@pytest.fixture
def tag_topic(db):
    def _tag(topic, *names):
        for name in names:
            tag, _ = Tag.objects.get_or_create(name=name)
            TopicTag.objects.create(topic=topic, tag=tag)
    return _tag


@pytest.fixture
def staff_tag_group(db):
    """{"staff": 1} 권한만 가진 태그 그룹 ('hidden' 태그 포함)"""
    tag, _ = Tag.objects.get_or_create(name="hidden")
    group = TagGroup.objects.create(name="staff only", permissions={"staff": TagGroup.PERMISSION_FULL})
    group.tags.add(tag)
    return group


@pytest.fixture
def site_settings():
    def _build(**overrides):
        return SiteSettings(overrides)
    return _build
